"""Fixed texts the WhatsApp bot sends or feeds to the model (Portuguese)."""

GREETING_TEMPLATE = (
    "Olá, *{name}*! 👋\n\n"
    "Aqui é o *{bot_name}*, assistente virtual da *{company_name}*.\n\n"
    "Percebemos que você solicitou contato pelo nosso site sobre:\n"
    '_"{description}"_\n\n'
    "Gostaria de conversar um pouco mais sobre isso? Estou aqui pra te ajudar!"
)

FAREWELL_TEMPLATE = (
    "*{name}*, foi um prazer conversar com você! 😊\n\n"
    "Já tenho todas as informações que preciso. Nossa *equipe técnica* vai "
    "analisar tudo e entrará em contato em breve para dar continuidade ao seu "
    "projeto.\n\n"
    "Qualquer dúvida, estamos à disposição!\n"
    "Obrigado pela confiança na *{company_name}*! 🚀"
)
FAREWELL_NAME_FALLBACK = "você"

FALLBACK_REPLY = (
    "Desculpe, tive um probleminha para responder agora. 🙏\n"
    "Pode me mandar sua mensagem de novo em alguns instantes?"
)

INTERNAL_CONTEXT_TEMPLATE = (
    "[CONTEXTO INTERNO - não mencione isso ao cliente] "
    "Lead: {name}, email: {email}. "
    'Solicitou contato pelo site com a descrição: "{description}". '
    "A primeira mensagem de saudação já foi enviada. "
    "Continue a conversa naturalmente a partir do histórico abaixo."
)
UNKNOWN_NAME = "desconhecido"
UNKNOWN_EMAIL = "não informado"
UNKNOWN_DESCRIPTION = "sem descrição"

BRIEF_SEPARATOR = "━━━━━━━━━━━━━━━━━━━━━"
BRIEF_HEADER = "📋 *BRIEF TÉCNICO — NOVO LEAD*"
BRIEF_FOOTER_TEMPLATE = "_Gerado automaticamente pelo {bot_name} Bot_"
BRIEF_UNKNOWN_CONTACT = "Desconhecido"
BRIEF_UNKNOWN_EMAIL = "Não informado"

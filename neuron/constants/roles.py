"""Built-in role names."""

ADMIN_ROLE = "ADMIN"
USER_ROLE = "USER"

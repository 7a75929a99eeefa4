"""Platform adapters for chat integrations."""

from neuron.adapters.base import BasePlatformAdapter
from neuron.adapters.evolution import EvolutionWhatsappAdapter

__all__ = ["BasePlatformAdapter", "EvolutionWhatsappAdapter"]

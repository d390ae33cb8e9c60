"""Arena slot identity."""

from cowbinder.core.identity.models import SlotId

__all__ = ["SlotId"]

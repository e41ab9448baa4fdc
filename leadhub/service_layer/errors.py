# leadhub/service_layer/errors.py
from __future__ import annotations


class BuyerNotFound(ValueError):
    def __init__(self, buyer_id: int) -> None:
        super().__init__(f"Buyer {buyer_id} not found")
        self.buyer_id = buyer_id


class PropertyNotFound(ValueError):
    def __init__(self, property_id: int) -> None:
        super().__init__(f"Property {property_id} not found")
        self.property_id = property_id


class LeadNotFound(ValueError):
    def __init__(self, lead_id: int) -> None:
        super().__init__(f"Lead {lead_id} not found")
        self.lead_id = lead_id


class DuplicateBuyer(ValueError):
    pass


class AlreadyInterested(ValueError):
    def __init__(self, buyer_id: int, property_id: int) -> None:
        super().__init__(f"Buyer {buyer_id} already expressed interest in property {property_id}")
        self.buyer_id = buyer_id
        self.property_id = property_id


class LeadPersistenceError(RuntimeError):
    """Lead write failed for a reason other than a duplicate. Safe to retry."""

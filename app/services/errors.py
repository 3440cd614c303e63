# app/services/errors.py
#
# Exception hierarchy shared by the services and mapped to HTTP responses
# in main.py.


class ResellTrackerError(Exception):
    """Base class for every error raised by the services."""


# ---- Validation (caught before anything is persisted) ----

class ValidationError(ResellTrackerError):
    pass


class InvalidSalePriceError(ValidationError):
    def __init__(self, raw=None):
        super().__init__("invalid sale price")
        self.raw = raw


class InvalidAmountError(ValidationError):
    def __init__(self, field: str, raw=None):
        super().__init__(f"invalid {field}")
        self.field = field
        self.raw = raw


class InvalidPlatformError(ValidationError):
    def __init__(self, platform):
        super().__init__(f"invalid platform: {platform!r}")
        self.platform = platform


class MissingNameError(ValidationError):
    def __init__(self, field: str = "item name"):
        super().__init__(f"{field} is required")
        self.field = field


# ---- Record store ----

class RecordStoreError(ResellTrackerError):
    """Any failure reported by the database behind the record store."""


class RecordNotFoundError(ResellTrackerError):
    def __init__(self, collection: str, record_id):
        super().__init__(f"{collection} record {record_id} not found")
        self.collection = collection
        self.record_id = record_id


class PartialConversionError(RecordStoreError):
    """
    Mark-as-sold persisted the sale but could not delete the source
    inventory item. Both records now exist and need manual reconciliation.
    """

    def __init__(self, sale_id, inventory_id):
        super().__init__(
            f"sale {sale_id} was recorded but inventory item {inventory_id} "
            "could not be removed"
        )
        self.sale_id = sale_id
        self.inventory_id = inventory_id

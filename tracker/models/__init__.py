# Importing every model registers it on Base.metadata.
from tracker.models.user import User  # noqa: F401
from tracker.models.project import Project  # noqa: F401
from tracker.models.task import Task  # noqa: F401
from tracker.models.installation import Installation  # noqa: F401
from tracker.models.purchase_request import PurchaseRequest, PurchaseRequestItem  # noqa: F401
from tracker.models.material import Material  # noqa: F401

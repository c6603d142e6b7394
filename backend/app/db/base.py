from backend.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from backend.app.models.user import User  # noqa: F401
from backend.app.models.profile import Profile  # noqa: F401
from backend.app.models.user_role import UserRole  # noqa: F401
from backend.app.models.receipt import Receipt  # noqa: F401
from backend.app.models.receipt_template import ReceiptTemplate  # noqa: F401

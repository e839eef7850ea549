# feedback_api/db/base.py
from feedback_api.db.base_class import Base  # noqa: F401

# Import every module that declares tables so Base.metadata sees them
from feedback_api.models import user  # noqa: F401
from feedback_api.models import feedback  # noqa: F401

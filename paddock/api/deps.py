"""Request dependencies."""

from paddock.database import get_db
from paddock.services.widget_data import WidgetDataService, create_widget_service


def get_widget_service() -> WidgetDataService:
    """Widget service wired to the default database.

    Built per request so settings changes apply immediately. Tests replace
    this through ``app.dependency_overrides``.
    """
    return create_widget_service(get_db)

from backoffice.models.application import (  # noqa: F401
    Application, ApplicationDocument, ApplicationStatusHistory,
)

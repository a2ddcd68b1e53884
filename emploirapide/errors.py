"""
Domain errors raised by the service layer.

Each error carries the user-facing message and the HTTP status the API layer
renders it with.
"""


class EmploiRapideError(Exception):
    """Base class for anticipated failures."""

    status_code: int = 500
    default_message: str = "Erreur interne du serveur"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class Unauthenticated(EmploiRapideError):
    status_code = 401
    default_message = "Non authentifié"


class Forbidden(EmploiRapideError):
    status_code = 403
    default_message = "Non autorisé"


class ValidationError(EmploiRapideError):
    status_code = 400
    default_message = "Données invalides"


class NotFound(EmploiRapideError):
    status_code = 404
    default_message = "Ressource non trouvée"


class Conflict(EmploiRapideError):
    # Duplicates have always been reported as 400 by the public API
    status_code = 400
    default_message = "Ressource déjà existante"


class UpstreamError(EmploiRapideError):
    """An external provider (job search, file storage) failed."""

    status_code = 500
    default_message = "Erreur du service externe"

    def __init__(self, message: str | None = None, status_code: int | None = None, details=None):
        super().__init__(message, status_code)
        self.details = details


class RateLimitedError(UpstreamError):
    status_code = 429
    default_message = "Limite de requêtes atteinte. Veuillez réessayer plus tard."


class InvalidCredentialError(UpstreamError):
    status_code = 401
    default_message = "Clé API invalide. Veuillez vérifier votre configuration."


class UploadError(UpstreamError):
    default_message = "Erreur lors de l'upload du fichier"

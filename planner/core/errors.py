"""Erreurs métier levées par les services et traduites en HTTP dans main.py"""


class PlannerError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(PlannerError):
    """Ressource inexistante ou hors du scope owner/workspace"""
    status_code = 404


class ValidationError(PlannerError):
    """Champ requis manquant / invalide, rejeté avant toute écriture"""
    status_code = 422

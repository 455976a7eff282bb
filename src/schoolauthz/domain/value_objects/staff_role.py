"""Staff roles assigned to school personnel."""

from enum import StrEnum


class StaffRole(StrEnum):
    """Job-function categories a staff user can hold."""

    PROPRIETAIRE = "proprietaire"
    ADMIN_SYSTEME = "admin_systeme"
    PROVISEUR = "proviseur"
    CENSEUR = "censeur"
    SURVEILLANT_GENERAL = "surveillant_general"
    DIRECTEUR = "directeur"
    SECRETARIAT = "secretariat"
    PROFESSEUR_PRINCIPAL = "professeur_principal"
    ENSEIGNANT = "enseignant"
    COORDINATEUR = "coordinateur"
    COMPTABLE = "comptable"
    AGENT_RECOUVREMENT = "agent_recouvrement"
    GARDIEN = "gardien"

"""
Translation catalogs for the status page.

Keys are dotted names; ``incidents.status.<n>`` holds the label for each
incident status code.
"""

CATALOGS: dict[str, dict[str, str]] = {
    "en": {
        "incidents.status.0": "Scheduled",
        "incidents.status.1": "Investigating",
        "incidents.status.2": "Identified",
        "incidents.status.3": "Watching",
        "incidents.status.4": "Fixed",
        "incidents.updates": "Updates",
        "incidents.none": "No updates have been posted yet.",
        "incidents.scheduled_for": "Scheduled for",
        "incidents.permalink": "Permalink",
    },
    "fr": {
        "incidents.status.0": "Planifié",
        "incidents.status.1": "Enquête en cours",
        "incidents.status.2": "Identifié",
        "incidents.status.3": "Surveillance",
        "incidents.status.4": "Résolu",
        "incidents.updates": "Mises à jour",
        "incidents.none": "Aucune mise à jour n'a encore été publiée.",
        "incidents.scheduled_for": "Prévu pour",
        "incidents.permalink": "Lien permanent",
    },
    "de": {
        "incidents.status.0": "Geplant",
        "incidents.status.1": "Untersuchungen laufen",
        "incidents.status.2": "Problem erkannt",
        "incidents.status.3": "Wird beobachtet",
        "incidents.status.4": "Behoben",
        "incidents.updates": "Aktualisierungen",
        "incidents.none": "Bisher wurden keine Aktualisierungen veröffentlicht.",
        "incidents.scheduled_for": "Geplant für",
        "incidents.permalink": "Permalink",
    },
    "nl": {
        "incidents.status.0": "Gepland",
        "incidents.status.1": "Onderzoek gaande",
        "incidents.status.2": "Geïdentificeerd",
        "incidents.status.3": "Aan het opvolgen",
        "incidents.status.4": "Opgelost",
        "incidents.updates": "Updates",
        "incidents.none": "Er zijn nog geen updates geplaatst.",
        "incidents.scheduled_for": "Gepland voor",
        "incidents.permalink": "Permalink",
    },
}

FALLBACK_LOCALE = "en"
SUPPORTED_LOCALES = frozenset(CATALOGS)

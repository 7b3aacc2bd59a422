"""
Status Messages
================
Localized status and error messages for PIG items and transforms.

Every validation and transform outcome is a :class:`Status`. Codes in the
600-699 band are reserved for this package and segmented by concern, so a
caller can branch on :func:`code_category` instead of parsing text.

Example::

    from pig_graph.messages import Code, create_status

    status = create_status(Code.ID_CHANGED, "d:A", "d:B", lang="de")
    status.ok            # False
    status.status_text   # "Die ID eines Elements kann nicht geändert werden ..."
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

SUPPORTED_LANGUAGES = ("en", "de", "fr", "es")
DEFAULT_LANGUAGE = "en"


class Code(IntEnum):
    OK = 0
    # Item identity
    ITEM_TYPE_CHANGED = 600
    HAS_CLASS_MISSING = 601
    ID_CHANGED = 602
    SPECIALIZES_CHANGED = 603
    # Id strings
    ID_MISSING = 620
    ID_EMPTY = 624
    ID_INVALID = 625
    # Id arrays
    NOT_AN_ARRAY = 630
    TOO_FEW_ELEMENTS = 631
    INVALID_ID_ELEMENT = 632
    NOT_AN_ID_OBJECT = 633
    ID_OBJECT_INVALID = 634
    ID_OBJECT_EXTRA_KEYS = 635
    # Multi-language text
    TEXT_NOT_AN_ARRAY = 640
    TEXT_ENTRY_INVALID = 641
    TEXT_LANG_INVALID = 642
    TEXT_ITEM_NOT_AN_OBJECT = 643
    TEXT_ITEM_VALUE_INVALID = 644
    TEXT_ITEM_LANG_MISSING = 645
    # Item instantiation
    REQUIRED_FIELD_MISSING = 650
    ITEM_TYPE_NOT_ALLOWED = 651
    UNKNOWN_ITEM_TYPE = 652
    INSTANTIATION_FAILED = 654
    # Package constraints
    ITEM_WITHOUT_ID = 670
    DUPLICATE_ID = 671
    PARTIAL_GRAPH = 679
    # Schema
    UNSUPPORTED_DATATYPE = 680
    SCHEMA_VALIDATION_FAILED = 681
    SCHEMA_ENGINE_ERROR = 682
    # General
    PARSE_FAILED = 690
    READ_FAILED = 694


_CATEGORIES: tuple[tuple[int, int, str], ...] = (
    (600, 619, "item"),
    (620, 629, "id"),
    (630, 639, "array"),
    (640, 649, "text"),
    (650, 669, "instantiation"),
    (670, 679, "package"),
    (680, 689, "schema"),
    (690, 699, "general"),
)


def code_category(code: int) -> str:
    """Return the concern a status code belongs to, e.g. ``"text"`` for 640-649."""
    if code == 0 or 200 <= code < 300:
        return "ok"
    for low, high, name in _CATEGORIES:
        if low <= code <= high:
            return name
    return "unknown"


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

# Templates use positional str.format fields.
_MESSAGES: dict[int, dict[str, str]] = {
    Code.OK: {"en": "OK", "de": "OK", "fr": "OK", "es": "OK"},
    Code.ITEM_TYPE_CHANGED: {
        "en": "Cannot change the itemType (tried to change from {0} to {1})",
        "de": "Der itemType kann nicht geändert werden (Versuch von {0} nach {1})",
        "fr": "Impossible de changer le itemType (tentative de {0} vers {1})",
        "es": "No se puede cambiar el itemType (intento de {0} a {1})",
    },
    Code.HAS_CLASS_MISSING: {
        "en": "'{0}' must have a hasClass reference",
        "de": "'{0}' muss eine hasClass-Referenz haben",
        "fr": "'{0}' doit avoir une référence hasClass",
        "es": "'{0}' debe tener una referencia hasClass",
    },
    Code.ID_CHANGED: {
        "en": "Cannot change the id of an item (tried to change from {0} to {1})",
        "de": "Die ID eines Elements kann nicht geändert werden (Versuch von {0} nach {1})",
        "fr": "Impossible de changer l'id d'un élément (tentative de {0} vers {1})",
        "es": "No se puede cambiar el id de un elemento (intento de {0} a {1})",
    },
    Code.SPECIALIZES_CHANGED: {
        "en": "Cannot change the specialization (tried to change from {0} to {1})",
        "de": "Die Spezialisierung kann nicht geändert werden (Versuch von {0} nach {1})",
        "fr": "Impossible de changer la spécialisation (tentative de {0} vers {1})",
        "es": "No se puede cambiar la especialización (intento de {0} a {1})",
    },
    Code.ID_MISSING: {
        "en": "{0} is missing",
        "de": "{0} fehlt",
        "fr": "{0} est manquant",
        "es": "{0} falta",
    },
    Code.ID_EMPTY: {
        "en": "{0} must be a non-empty string",
        "de": "{0} muss eine nicht-leere Zeichenkette sein",
        "fr": "{0} doit être une chaîne non vide",
        "es": "{0} debe ser una cadena no vacía",
    },
    Code.ID_INVALID: {
        "en": "{0} must be a string with a term having a namespace or an URI",
        "de": "{0} muss eine Zeichenkette mit einem Begriff mit Namensraum oder eine URI sein",
        "fr": "{0} doit être une chaîne avec un terme ayant un espace de noms ou un URI",
        "es": "{0} debe ser una cadena con un término que tenga un espacio de nombres o un URI",
    },
    Code.NOT_AN_ARRAY: {
        "en": "{0} must be an array",
        "de": "{0} muss ein Array sein",
        "fr": "{0} doit être un tableau",
        "es": "{0} debe ser un array",
    },
    Code.TOO_FEW_ELEMENTS: {
        "en": "{0} must contain at least {1} element(s)",
        "de": "{0} muss mindestens {1} Element(e) enthalten",
        "fr": "{0} doit contenir au moins {1} élément(s)",
        "es": "{0} debe contener al menos {1} elemento(s)",
    },
    Code.INVALID_ID_ELEMENT: {
        "en": "{0}[{1}] must be a valid id string",
        "de": "{0}[{1}] muss eine gültige ID-Zeichenkette sein",
        "fr": "{0}[{1}] doit être une chaîne d'id valide",
        "es": "{0}[{1}] debe ser una cadena de id válida",
    },
    Code.NOT_AN_ID_OBJECT: {
        "en": "{0}[{1}] must be an object with an 'id' or '@id' string",
        "de": "{0}[{1}] muss ein Objekt mit einer 'id'- oder '@id'-Zeichenkette sein",
        "fr": "{0}[{1}] doit être un objet avec une chaîne 'id' ou '@id'",
        "es": "{0}[{1}] debe ser un objeto con una cadena 'id' o '@id'",
    },
    Code.ID_OBJECT_INVALID: {
        "en": "{0}[{1}] must contain a valid 'id' or '@id' string",
        "de": "{0}[{1}] muss eine gültige 'id'- oder '@id'-Zeichenkette enthalten",
        "fr": "{0}[{1}] doit contenir une chaîne 'id' ou '@id' valide",
        "es": "{0}[{1}] debe contener una cadena 'id' o '@id' válida",
    },
    Code.ID_OBJECT_EXTRA_KEYS: {
        "en": "{0}[{1}] must be an id-object with a single 'id' or '@id' property",
        "de": "{0}[{1}] muss ein ID-Objekt mit einer einzelnen 'id'- oder '@id'-Eigenschaft sein",
        "fr": "{0}[{1}] doit être un objet-id avec une seule propriété 'id' ou '@id'",
        "es": "{0}[{1}] debe ser un objeto-id con una única propiedad 'id' o '@id'",
    },
    Code.TEXT_NOT_AN_ARRAY: {
        "en": "Invalid {0}: expected an array of language-tagged texts",
        "de": "Ungültiges {0}: Array von sprachmarkierten Texten erwartet",
        "fr": "{0} invalide: tableau de textes marqués par langue attendu",
        "es": "{0} inválido: se espera un array de textos etiquetados por idioma",
    },
    Code.TEXT_ENTRY_INVALID: {
        "en": "Invalid {0} entry: expected object with string 'value'",
        "de": "Ungültiger {0}-Eintrag: Objekt mit Zeichenkette 'value' erwartet",
        "fr": "Entrée {0} invalide: objet avec chaîne 'value' attendu",
        "es": "Entrada {0} inválida: se espera objeto con cadena 'value'",
    },
    Code.TEXT_LANG_INVALID: {
        "en": "Invalid {0} entry: 'lang' must be a string when present",
        "de": "Ungültiger {0}-Eintrag: 'lang' muss, falls vorhanden, eine Zeichenkette sein",
        "fr": "Entrée {0} invalide: 'lang' doit être une chaîne si présent",
        "es": "Entrada {0} inválida: 'lang' debe ser una cadena cuando esté presente",
    },
    Code.TEXT_ITEM_NOT_AN_OBJECT: {
        "en": "Invalid {0}[{1}]: expected object with 'value' and 'lang'",
        "de": "Ungültiger {0}[{1}]: Objekt mit 'value' und 'lang' erwartet",
        "fr": "Entrée {0}[{1}] invalide: objet avec 'value' et 'lang' attendu",
        "es": "Entrada {0}[{1}] inválida: se espera objeto con 'value' y 'lang'",
    },
    Code.TEXT_ITEM_VALUE_INVALID: {
        "en": "Invalid {0}[{1}]: 'value' must be a string",
        "de": "Ungültiger {0}[{1}]: 'value' muss eine Zeichenkette sein",
        "fr": "Entrée {0}[{1}]: 'value' doit être une chaîne",
        "es": "Entrada {0}[{1}]: 'value' debe ser una cadena",
    },
    Code.TEXT_ITEM_LANG_MISSING: {
        "en": "Invalid {0}[{1}]: 'lang' must be a non-empty string",
        "de": "Ungültiger {0}[{1}]: 'lang' muss eine nicht-leere Zeichenkette sein",
        "fr": "Entrée {0}[{1}]: 'lang' doit être une chaîne non vide",
        "es": "Entrada {0}[{1}]: 'lang' debe ser una cadena no vacía",
    },
    Code.REQUIRED_FIELD_MISSING: {
        "en": '{0}: Missing required field "{1}" in item with id "{2}"',
        "de": '{0}: Pflichtfeld "{1}" fehlt bei Item mit ID "{2}"',
        "fr": '{0}: Champ obligatoire "{1}" manquant dans l\'élément avec id "{2}"',
        "es": '{0}: Falta el campo obligatorio "{1}" en el elemento con id "{2}"',
    },
    Code.ITEM_TYPE_NOT_ALLOWED: {
        "en": '{0}: Item type "{1}" is not allowed in package graph',
        "de": '{0}: Elementtyp "{1}" ist im Package-Graph nicht erlaubt',
        "fr": '{0}: Le type d\'élément "{1}" n\'est pas autorisé dans le graphe du package',
        "es": '{0}: El tipo de elemento "{1}" no está permitido en el grafo del paquete',
    },
    Code.UNKNOWN_ITEM_TYPE: {
        "en": '{0}: Unable to create instance for itemType "{1}"',
        "de": '{0}: Instanz für itemType "{1}" kann nicht erstellt werden',
        "fr": '{0}: Impossible de créer une instance pour itemType "{1}"',
        "es": '{0}: No se puede crear una instancia para itemType "{1}"',
    },
    Code.INSTANTIATION_FAILED: {
        "en": "{0}: Failed to instantiate {1}: {2}",
        "de": "{0}: Instanziierung von {1} fehlgeschlagen: {2}",
        "fr": "{0}: Échec de l'instanciation de {1}: {2}",
        "es": "{0}: Error al instanciar {1}: {2}",
    },
    Code.ITEM_WITHOUT_ID: {
        "en": "Package validation failed: item at index {0} has no id",
        "de": "Paket-Validierung fehlgeschlagen: Element mit Index {0} hat keine id",
        "fr": "Échec de la validation du package: l'élément à l'index {0} n'a pas d'id",
        "es": "Error en la validación del paquete: el elemento en el índice {0} no tiene id",
    },
    Code.DUPLICATE_ID: {
        "en": "Package validation failed: duplicate id '{0}' found at indices {1} and {2}",
        "de": "Paket-Validierung fehlgeschlagen: doppelte ID '{0}' bei Indizes {1} und {2} gefunden",
        "fr": "Échec de la validation du package: id '{0}' en double trouvé aux indices {1} et {2}",
        "es": "Error en la validación del paquete: id '{0}' duplicado en los índices {1} y {2}",
    },
    Code.PARTIAL_GRAPH: {
        "en": "{0}: Created {1} of {2} graph items",
        "de": "{0}: {1} von {2} Graph-Elementen erstellt",
        "fr": "{0}: {1} éléments de graphe créés sur {2}",
        "es": "{0}: Se crearon {1} de {2} elementos del grafo",
    },
    Code.UNSUPPORTED_DATATYPE: {
        "en": "Property '{0}' has unsupported datatype '{1}'. It will be treated as 'xs:string'.",
        "de": "Eigenschaft '{0}' hat nicht unterstützten Datentyp '{1}'. Sie wird als 'xs:string' behandelt.",
        "fr": "La propriété '{0}' a un type de données non supporté '{1}'. Elle sera traitée comme 'xs:string'.",
        "es": "La propiedad '{0}' tiene un tipo de datos no soportado '{1}'. Se tratará como 'xs:string'.",
    },
    Code.SCHEMA_VALIDATION_FAILED: {
        "en": "Schema validation failed for {0} '{1}': {2}",
        "de": "Schema-Validierung fehlgeschlagen für {0} '{1}': {2}",
        "fr": "Échec de la validation du schéma pour {0} '{1}': {2}",
        "es": "Falló la validación del esquema para {0} '{1}': {2}",
    },
    Code.SCHEMA_ENGINE_ERROR: {
        "en": "Schema validation error for {0} '{1}': {2}",
        "de": "Schema-Validierungsfehler für {0} '{1}': {2}",
        "fr": "Erreur de validation du schéma pour {0} '{1}': {2}",
        "es": "Error de validación del esquema para {0} '{1}': {2}",
    },
    Code.PARSE_FAILED: {
        "en": "Failed to parse {0}: {1}",
        "de": "Parsing von {0} fehlgeschlagen: {1}",
        "fr": "Échec de l'analyse {0}: {1}",
        "es": "Error al analizar {0}: {1}",
    },
    Code.READ_FAILED: {
        "en": "Failed to read file '{0}': {1}",
        "de": "Fehler beim Lesen der Datei '{0}': {1}",
        "fr": "Échec de la lecture du fichier '{0}': {1}",
        "es": "Error al leer el archivo '{0}': {1}",
    },
}


def normalize_language(lang: str | None) -> str:
    """Reduce an IETF tag to a supported message language, falling back to English."""
    if not lang:
        return DEFAULT_LANGUAGE
    short = lang.lower()[:2]
    return short if short in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def get_message(code: int, *args: Any, lang: str | None = DEFAULT_LANGUAGE) -> str:
    templates = _MESSAGES.get(code)
    if templates is None:
        return f"Unknown error code {code}"
    template = templates.get(normalize_language(lang)) or templates[DEFAULT_LANGUAGE]
    return template.format(*args)


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Status:
    """Outcome of an operation; ``response`` carries a payload where one exists."""
    status: int
    status_text: str
    ok: bool
    response: Any = None
    response_type: str | None = None

    @property
    def category(self) -> str:
        return code_category(self.status)

    def __str__(self) -> str:
        return f"[{self.status}] {self.status_text}"


def is_ok(code: int) -> bool:
    return 200 <= code < 300 or code == 0


def create_status(code: int, *args: Any, lang: str | None = DEFAULT_LANGUAGE) -> Status:
    """Build a :class:`Status` without payload."""
    return Status(status=int(code), status_text=get_message(code, *args, lang=lang), ok=is_ok(code))


def create_response(
    code: int,
    response: Any,
    response_type: str | None = None,
    *args: Any,
    lang: str | None = DEFAULT_LANGUAGE,
) -> Status:
    """Build a :class:`Status` carrying ``response`` as payload."""
    return Status(
        status=int(code),
        status_text=get_message(code, *args, lang=lang),
        ok=is_ok(code),
        response=response,
        response_type=response_type,
    )


STATUS_OK = create_status(Code.OK)

"""
Entidad de dominio: ProfileRecord (perfil canonico sincronizado).

El email es la clave natural entre sitios. El user_id es local al nodo y
nunca se compara entre sitios.
"""
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional


# Campos de nombre: el upsert los trata aparte (solo se actualizan si llegan).
NAME_FIELDS = ("first_name", "last_name", "display_name")

# Atributos canonicos que el upsert escribe tal cual cuando vienen en el registro.
ATTRIBUTE_FIELDS = (
    "phone_number",
    "mobile_number",
    "city_state",
    "region",
    "office",
    "job_title",
    "nmls",
    "dre_license",
    "specialties",
    "languages",
    "awards",
    "namb_certifications",
    "service_areas",
    "arrive",
    "niche_bio_content",
    "canva_folder_link",
    "headshot_id",
    "date_of_birth",
    "profile_slug",
    "linkedin_url",
    "facebook_url",
    "instagram_url",
    "twitter_url",
    "youtube_url",
    "tiktok_url",
    "century21_url",
    "zillow_url",
    "biography",
    "is_active",
    "company_role",
    "company_roles",
)

LIST_FIELDS = frozenset({
    "specialties",
    "languages",
    "awards",
    "namb_certifications",
    "service_areas",
    "company_roles",
})

# Alias aceptados en payloads de sitios antiguos.
PAYLOAD_ALIASES = {"select_person_type": "company_role"}


def normalize_email(email: Any) -> str:
    """Email comparable entre sitios: sin espacios y en minusculas. Un no-str cuenta como vacio."""
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


@dataclass
class ProfileRecord:
    """
    Perfil canonico. Un atributo en None significa "no informado":
    el upsert nunca lo borra.
    """

    email: str
    user_id: Optional[int] = None

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    display_name: Optional[str] = None

    phone_number: Optional[str] = None
    mobile_number: Optional[str] = None
    city_state: Optional[str] = None
    region: Optional[str] = None
    office: Optional[str] = None

    job_title: Optional[str] = None
    nmls: Optional[str] = None
    dre_license: Optional[str] = None
    specialties: Optional[List[str]] = None
    languages: Optional[List[str]] = None
    awards: Optional[List[str]] = None
    namb_certifications: Optional[List[str]] = None
    service_areas: Optional[List[str]] = None
    arrive: Optional[str] = None
    niche_bio_content: Optional[str] = None
    canva_folder_link: Optional[str] = None
    headshot_id: Optional[int] = None
    date_of_birth: Optional[str] = None
    profile_slug: Optional[str] = None

    linkedin_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    twitter_url: Optional[str] = None
    youtube_url: Optional[str] = None
    tiktok_url: Optional[str] = None
    century21_url: Optional[str] = None
    zillow_url: Optional[str] = None

    biography: Optional[str] = None
    is_active: Optional[bool] = None
    company_role: Optional[str] = None
    company_roles: Optional[List[str]] = None

    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self):
        self.email = normalize_email(self.email)

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "ProfileRecord":
        """
        Construye un registro desde el mapa recibido por webhook o API del hub.

        Las claves desconocidas se guardan en `extra` y no se escriben.
        El id del nodo de origen se descarta.

        Args:
            data: Perfil como diccionario clave/valor

        Returns:
            ProfileRecord: Registro normalizado
        """
        known = {f.name for f in fields(cls)} - {"extra", "user_id"}
        values: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}

        for key, value in data.items():
            canonical = PAYLOAD_ALIASES.get(key, key)
            if canonical in known:
                # La clave canonica tiene prioridad sobre el alias
                if canonical in values and key != canonical:
                    continue
                values[canonical] = value
            elif key not in ("id", "user_id"):
                extra[key] = value

        if values.get("company_role") == "":
            values["company_role"] = None
        if values.get("headshot_id") not in (None, ""):
            values["headshot_id"] = _to_int(values["headshot_id"])
        elif "headshot_id" in values:
            values["headshot_id"] = None

        values.setdefault("email", "")
        return cls(extra=extra, **values)

    def supplied_attributes(self) -> Dict[str, Any]:
        """Atributos canonicos informados (no None), sin nombres ni identidad."""
        return {
            name: getattr(self, name)
            for name in ATTRIBUTE_FIELDS
            if getattr(self, name) is not None
        }

    def to_payload(self) -> Dict[str, Any]:
        """Mapa clave/valor para el wire; omite atributos no informados."""
        payload: Dict[str, Any] = {"email": self.email}
        if self.user_id is not None:
            payload["id"] = self.user_id
        for name in NAME_FIELDS + ATTRIBUTE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                payload[name] = value
        # Los satelites antiguos leen el company role desde el alias
        if self.company_role is not None:
            payload["select_person_type"] = self.company_role
        return payload

    def computed_display_name(self) -> str:
        if self.display_name:
            return self.display_name
        return " ".join(part for part in (self.first_name, self.last_name) if part).strip()


def _to_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None

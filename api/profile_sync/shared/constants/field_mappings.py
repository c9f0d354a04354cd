"""
Tabla de migracion de claves legacy de user_meta a columnas canonicas del perfil.

El orden de FIELD_MAPPINGS define la precedencia: la primera variante legacy
con valor gana, y nunca se pisa una columna canonica que ya tenga valor.
"""
from typing import FrozenSet, Tuple


FIELD_MAPPINGS: Tuple[Tuple[str, str], ...] = (
    # Cargo
    ("title", "job_title"),
    ("job_title", "job_title"),
    ("_job_title", "job_title"),
    ("psb_title", "job_title"),
    # Telefono
    ("phone", "phone_number"),
    ("phone_number", "phone_number"),
    ("_phone_number", "phone_number"),
    ("psb_phone", "phone_number"),
    # NMLS
    ("nmls", "nmls"),
    ("_nmls", "nmls"),
    ("nmls_id", "nmls"),
    ("psb_nmls_id", "nmls"),
    ("frs_nmls_number", "nmls"),
    # Licencia
    ("license_number", "dre_license"),
    ("_license_number", "dre_license"),
    ("psb_license_number", "dre_license"),
    ("frs_license_number", "dre_license"),
    # Ubicacion
    ("city_state", "city_state"),
    ("_city_state", "city_state"),
    ("location", "city_state"),
    # Biografia
    ("bio", "biography"),
    ("biography", "biography"),
    ("_biography", "biography"),
    ("niche_bio_content", "niche_bio_content"),
    ("_niche_bio_content", "niche_bio_content"),
    # Arrive
    ("arrive", "arrive"),
    ("_arrive", "arrive"),
    ("frs_arrive_link", "arrive"),
    # Redes sociales
    ("linkedin", "linkedin_url"),
    ("linkedin_url", "linkedin_url"),
    ("_linkedin_url", "linkedin_url"),
    ("facebook", "facebook_url"),
    ("facebook_url", "facebook_url"),
    ("_facebook_url", "facebook_url"),
    ("instagram", "instagram_url"),
    ("instagram_url", "instagram_url"),
    ("_instagram_url", "instagram_url"),
    ("twitter", "twitter_url"),
    ("twitter_url", "twitter_url"),
    ("_twitter_url", "twitter_url"),
    ("youtube", "youtube_url"),
    ("youtube_url", "youtube_url"),
    ("_youtube_url", "youtube_url"),
    ("tiktok", "tiktok_url"),
    ("tiktok_url", "tiktok_url"),
    ("_tiktok_url", "tiktok_url"),
    # Profesional
    ("specialties_lo", "specialties"),
    ("_specialties_lo", "specialties"),
    ("frs_specialties_lo", "specialties"),
    ("awards", "awards"),
    ("_awards", "awards"),
    ("namb_certifications", "namb_certifications"),
    ("_namb_certifications", "namb_certifications"),
    ("date_of_birth", "date_of_birth"),
    ("_date_of_birth", "date_of_birth"),
    ("languages", "languages"),
    ("_languages", "languages"),
    ("canva_folder_link", "canva_folder_link"),
    ("_canva_folder_link", "canva_folder_link"),
    ("headshot", "headshot_id"),
    ("_headshot", "headshot_id"),
    # Tipo de persona
    ("select_person_type", "company_role"),
)

# Campos de perfiles sociales abandonados: se borran si tienen valor.
DEPRECATED_KEYS: FrozenSet[str] = frozenset({
    "dribbble",
    "github",
    "mastodon",
    "medium",
    "odnoklassniki",
    "pinterest",
    "vimeo",
    "vkontakte",
    "wordpress",
})

# Los valores con este prefijo son referencias a definiciones de campo, no datos.
FIELD_REFERENCE_PREFIX = "field_"

# Claves con este prefijo son duplicados ya consolidados; cleanup no las toca.
CONSOLIDATED_KEY_PREFIX = "frs_"


def legacy_keys() -> Tuple[str, ...]:
    """Claves legacy unicas en orden de la tabla."""
    seen = []
    for legacy_key, _ in FIELD_MAPPINGS:
        if legacy_key not in seen:
            seen.append(legacy_key)
    return tuple(seen)

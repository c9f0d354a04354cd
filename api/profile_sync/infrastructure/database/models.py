"""
Modelos de base de datos (ORM).

Los atributos canonicos del perfil son columnas tipadas de `users`.
`user_meta` guarda las claves legacy hasta que la migracion de campos
las consolida; nada fuera del migrador las lee.
"""
from sqlalchemy import Column, String, Integer, DateTime, Text, JSON, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from profile_sync.infrastructure.database.session import Base


class UserModel(Base):
    """Usuario local con su perfil canonico."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    display_name = Column(String(255), nullable=True)

    # Contacto
    phone_number = Column(String(50), nullable=True)
    mobile_number = Column(String(50), nullable=True)
    city_state = Column(String(255), nullable=True)
    region = Column(String(255), nullable=True)
    office = Column(String(255), nullable=True)

    # Profesional
    job_title = Column(String(255), nullable=True)
    nmls = Column(String(50), nullable=True)
    dre_license = Column(String(50), nullable=True)
    specialties = Column(JSON, nullable=True)
    languages = Column(JSON, nullable=True)
    awards = Column(JSON, nullable=True)
    namb_certifications = Column(JSON, nullable=True)
    service_areas = Column(JSON, nullable=True)
    arrive = Column(String(500), nullable=True)
    niche_bio_content = Column(Text, nullable=True)
    canva_folder_link = Column(String(500), nullable=True)
    headshot_id = Column(Integer, nullable=True)
    date_of_birth = Column(String(20), nullable=True)
    profile_slug = Column(String(255), nullable=True, index=True)

    # Redes sociales
    linkedin_url = Column(String(500), nullable=True)
    facebook_url = Column(String(500), nullable=True)
    instagram_url = Column(String(500), nullable=True)
    twitter_url = Column(String(500), nullable=True)
    youtube_url = Column(String(500), nullable=True)
    tiktok_url = Column(String(500), nullable=True)
    century21_url = Column(String(500), nullable=True)
    zillow_url = Column(String(500), nullable=True)

    biography = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    company_role = Column(String(50), nullable=True, index=True)
    company_roles = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, company_role={self.company_role})>"


class UserRoleModel(Base):
    """Roles de plataforma asignados a un usuario."""

    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(50), nullable=False, index=True)

    def __repr__(self):
        return f"<UserRole(user_id={self.user_id}, role={self.role})>"


class UserMetaModel(Base):
    """Bolsa clave/valor con atributos legacy pendientes de migrar."""

    __tablename__ = "user_meta"
    __table_args__ = (UniqueConstraint("user_id", "meta_key", name="uq_user_meta_user_key"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    meta_key = Column(String(255), nullable=False, index=True)
    meta_value = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<UserMeta(user_id={self.user_id}, key={self.meta_key})>"


class SystemSettingsModel(Base):
    """Configuracion persistida del sitio (clave -> valor JSON)."""

    __tablename__ = "system_settings"

    key = Column(String(100), primary_key=True)
    value = Column(JSON, nullable=True)
    description = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<SystemSetting(key={self.key})>"

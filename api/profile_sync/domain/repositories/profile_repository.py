"""
Interfaz del repositorio de perfiles.
Define el contrato que usan la sincronizacion y la migracion de campos.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from profile_sync.domain.entities.profile import ProfileRecord


class IProfileRepository(ABC):
    """
    Operaciones de persistencia sobre usuarios, sus roles de plataforma
    y la bolsa de atributos legacy.
    """

    @abstractmethod
    async def find_id_by_email(self, email: str) -> Optional[int]:
        """
        Busca un usuario por email normalizado.

        Args:
            email: Email (se compara sin espacios y en minusculas)

        Returns:
            Optional[int]: ID local o None
        """
        pass

    @abstractmethod
    async def get_profile(self, user_id: int) -> Optional[ProfileRecord]:
        """
        Carga el perfil canonico completo de un usuario.

        Args:
            user_id: ID local del usuario

        Returns:
            Optional[ProfileRecord]: Perfil o None si no existe
        """
        pass

    @abstractmethod
    async def list_profiles(
        self,
        company_role: Optional[str] = None,
        limit: int = 100,
        active_only: bool = True,
    ) -> List[ProfileRecord]:
        """
        Lista perfiles ordenados por ID.

        Args:
            company_role: Filtra por company role primario
            limit: Maximo de perfiles a retornar
            active_only: Excluye usuarios desactivados

        Returns:
            List[ProfileRecord]: Perfiles encontrados
        """
        pass

    @abstractmethod
    async def count_profiles(self, company_role: Optional[str] = None, active_only: bool = True) -> int:
        pass

    @abstractmethod
    async def list_user_ids(self) -> List[int]:
        pass

    @abstractmethod
    async def username_exists(self, username: str) -> bool:
        pass

    @abstractmethod
    async def create_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> int:
        """
        Crea un usuario nuevo.

        Returns:
            int: ID asignado
        """
        pass

    @abstractmethod
    async def update_names(
        self,
        user_id: int,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> None:
        """Actualiza solo los nombres informados (no None)."""
        pass

    @abstractmethod
    async def set_attributes(self, user_id: int, attributes: Dict[str, Any]) -> None:
        """Escribe atributos canonicos tal cual. Las claves ausentes no se tocan."""
        pass

    @abstractmethod
    async def get_platform_roles(self, user_id: int) -> List[str]:
        pass

    @abstractmethod
    async def add_platform_role(self, user_id: int, role: str) -> None:
        pass

    @abstractmethod
    async def remove_platform_roles(self, user_id: int, roles: Iterable[str]) -> None:
        pass

    @abstractmethod
    async def get_meta(self, user_id: int) -> Dict[str, Any]:
        """Bolsa legacy completa del usuario (clave -> valor)."""
        pass

    @abstractmethod
    async def delete_meta(self, user_id: int, meta_key: str) -> None:
        pass

    @abstractmethod
    async def count_meta_key(self, meta_key: str) -> int:
        pass

    @abstractmethod
    async def delete_meta_key(self, meta_key: str) -> int:
        """Borra una clave legacy en todos los usuarios. Retorna filas borradas."""
        pass

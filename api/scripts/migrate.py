#!/usr/bin/env python
"""
Wrapper sobre Alembic para el esquema de perfiles.

Uso:
    python scripts/migrate.py upgrade [target]     # default: head
    python scripts/migrate.py downgrade [target]   # default: -1
    python scripts/migrate.py revision "desc"      # autogenerate
    python scripts/migrate.py current
    python scripts/migrate.py history

La migracion de claves legacy de user_meta NO es una migracion de
esquema: se ejecuta con `profile-sync migrate-fields`.
"""
import subprocess
import sys
from pathlib import Path


API_DIR = Path(__file__).parent.parent

DEFAULT_TARGETS = {"upgrade": "head", "downgrade": "-1"}


def run_alembic(args: list) -> int:
    """Ejecuta alembic desde el directorio del API y devuelve su codigo de salida."""
    cmd = ["alembic"] + args
    print(f"Ejecutando: {' '.join(cmd)}")
    print("-" * 50)
    result = subprocess.run(cmd, cwd=API_DIR)
    return result.returncode


def build_args(command: str, rest: list) -> list:
    if command in DEFAULT_TARGETS:
        return [command, rest[0] if rest else DEFAULT_TARGETS[command]]
    if command == "revision":
        if not rest:
            raise ValueError("Falta mensaje para la revision")
        return ["revision", "-m", rest[0], "--autogenerate"]
    if command == "current":
        return ["current"]
    if command == "history":
        return ["history", "--verbose"]
    raise ValueError(f"Comando desconocido: {command}")


def main():
    if len(sys.argv) < 2 or sys.argv[1] in ("help", "-h", "--help"):
        print(__doc__)
        sys.exit(0 if len(sys.argv) >= 2 else 1)

    try:
        args = build_args(sys.argv[1].lower(), sys.argv[2:])
    except ValueError as e:
        print(f"Error: {e}")
        print(__doc__)
        sys.exit(1)

    sys.exit(run_alembic(args))


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Interactive setup for the backend .env file.

Usage:
    python scripts/setup/setup_env.py

Prompts for the admin password (stored as a bcrypt hash), the JWT signing
secret, the database URL and the language model name, then writes .env at the
project root. A .env.example with every value blanked is written alongside it
if one does not exist yet.
"""

import getpass
import re
import secrets
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Add backend to path
sys.path.insert(0, str(PROJECT_ROOT / "backend"))

from infrastructure.auth import hash_password  # noqa: E402

ENV_PATH = PROJECT_ROOT / ".env"
EXAMPLE_PATH = PROJECT_ROOT / ".env.example"

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./note_refinery.db"
DEFAULT_LLM_MODEL = "claude-sonnet-4-5-20250929"


def ask(prompt: str, default: str = "") -> str:
    """Ask until a non-empty answer is given (or a default exists)."""
    suffix = f" [{default}]" if default else ""
    while True:
        answer = input(f"{prompt}{suffix}: ").strip() or default
        if answer:
            return answer
        print("   ❌ A value is required.")


def ask_password() -> str:
    while True:
        password = getpass.getpass("Admin password: ")
        if not password:
            print("   ❌ A password is required.")
            continue
        if password != getpass.getpass("Confirm password: "):
            print("   ❌ Passwords do not match. Please try again.")
            continue
        if len(password) < 8:
            print("   ⚠️  Password is less than 8 characters.")
            if input("   Continue anyway? (y/N): ").lower() != "y":
                continue
        return password


def render_env(values: dict) -> str:
    return f"""# Authentication
API_KEY_HASH={values["API_KEY_HASH"]}
JWT_SECRET={values["JWT_SECRET"]}
ENABLE_GUEST_LOGIN=false
GUEST_PASSWORD_HASH=

# Document store
DATABASE_URL={values["DATABASE_URL"]}

# Language model
LLM_MODEL={values["LLM_MODEL"]}

# Server
DEBUG=false
FRONTEND_URL=
"""


def blank_values(env_content: str) -> str:
    return re.sub(r"^([A-Z_]+)=.*$", r"\1=", env_content, flags=re.MULTILINE)


def setup_environment():
    print("=" * 60)
    print("Note Refinery Setup")
    print("=" * 60)
    print()

    if ENV_PATH.exists():
        overwrite = input(f"❓ {ENV_PATH.name} already exists. Overwrite? (y/N): ")
        if overwrite.lower() != "y":
            print("Setup cancelled.")
            return

    print("🔐 Authentication")
    password = ask_password()
    password_hash = hash_password(password)

    jwt_secret = getpass.getpass("JWT secret (leave blank to generate one): ").strip()
    if not jwt_secret:
        jwt_secret = secrets.token_urlsafe(48)
        print("   ✅ Generated a random JWT secret")

    print("\n🗄️  Document store")
    database_url = ask("Database URL", DEFAULT_DATABASE_URL)

    print("\n🤖 Language model")
    llm_model = ask("Model name", DEFAULT_LLM_MODEL)

    content = render_env(
        {
            "API_KEY_HASH": password_hash,
            "JWT_SECRET": jwt_secret,
            "DATABASE_URL": database_url,
            "LLM_MODEL": llm_model,
        }
    )

    try:
        ENV_PATH.write_text(content, encoding="utf-8")
        print(f"\n✅ Environment configuration saved to {ENV_PATH}")

        if not EXAMPLE_PATH.exists():
            EXAMPLE_PATH.write_text(blank_values(content), encoding="utf-8")
            print(f"✅ Example file created at {EXAMPLE_PATH}")
    except OSError as e:
        print(f"\n❌ Error writing environment file: {e}")
        return

    print()
    print("🚀 Next steps:")
    print("  1. cd backend && uvicorn main:app --reload")
    print("  2. Log in with the password you just chose")
    print()
    print("📝 Notes:")
    print("  - Keep .env secret and don't commit it to git")
    print("  - Users log in with the original password, not the hash")
    print("  - Restart the backend after editing .env")
    print()


if __name__ == "__main__":
    try:
        setup_environment()
    except KeyboardInterrupt:
        print("\n\nAborted.")

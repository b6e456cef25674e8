from typing import Any, Dict, Optional

from .config import logger
from .connection import get_db_connection
from .security import hash_password, is_password_hashed, verify_password


class ProfileDB:
    @staticmethod
    def get_profile(profile_id: str) -> Optional[Dict[str, Any]]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                'SELECT id, email, first_name, second_name, role, created_at FROM profiles WHERE id = ?',
                (profile_id,)
            )
            row = cursor.fetchone()
            return dict(row) if row else None

    @staticmethod
    def get_by_email(email: str) -> Optional[Dict[str, Any]]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT * FROM profiles WHERE email = ?', ((email or '').strip().lower(),))
            row = cursor.fetchone()
            return dict(row) if row else None

    @staticmethod
    def upsert_profile(
        profile_id: str,
        email: str,
        password: Optional[str] = None,
        role: str = 'user',
        first_name: Optional[str] = None,
        second_name: Optional[str] = None,
    ) -> str:
        if password and not is_password_hashed(password):
            password = hash_password(password)
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                INSERT INTO profiles (id, email, password, first_name, second_name, role)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    email = excluded.email,
                    password = COALESCE(excluded.password, profiles.password),
                    first_name = excluded.first_name,
                    second_name = excluded.second_name,
                    role = excluded.role,
                    updated_at = CURRENT_TIMESTAMP
            ''', (profile_id, email.strip().lower(), password, first_name, second_name, role))
            conn.commit()
        return profile_id

    @staticmethod
    def verify_credentials(email: str, password: str) -> Optional[Dict[str, Any]]:
        """Return the profile (without its password hash) when the credentials match."""
        profile = ProfileDB.get_by_email(email)
        if not profile:
            return None

        stored_password = profile.pop('password', None)
        if not stored_password or not verify_password(password, stored_password):
            logger.info("Rejected login for %s", (email or '').strip().lower())
            return None
        return profile

"""Settings repository - Database operations for admin key/value settings"""

from sqlalchemy.orm import Session

from ...models import AdminSetting


class SettingsRepository:
    """Repository for admin settings"""

    @staticmethod
    def get_values(db: Session, keys: list[str]) -> dict[str, str]:
        """Get stored values for the given keys (missing keys are left out)"""
        rows = db.query(AdminSetting).filter(AdminSetting.key.in_(keys)).all()
        return {row.key: row.value for row in rows}

    @staticmethod
    def get_all(db: Session) -> dict[str, str]:
        rows = db.query(AdminSetting).order_by(AdminSetting.key.asc()).all()
        return {row.key: row.value for row in rows}

    @staticmethod
    def upsert_many(db: Session, values: dict[str, str]) -> int:
        """Create or update each key, committing once"""
        existing = {
            row.key: row
            for row in db.query(AdminSetting).filter(AdminSetting.key.in_(list(values))).all()
        }
        for key, value in values.items():
            row = existing.get(key)
            if row:
                row.value = value
            else:
                db.add(AdminSetting(key=key, value=value))
        db.commit()
        return len(values)

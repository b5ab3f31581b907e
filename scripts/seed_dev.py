# seed_dev.py
from sqlalchemy.orm import Session

from evalsys.core.eval_settings import SettingKey
from evalsys.core.settings_store import DbSettingsProvider
from evalsys.db.base import Base
from evalsys.db.session import SessionLocal, engine
from evalsys.models.user import User


DEV_SETTINGS = {
    SettingKey.EVAL_USE_STOP_DATE: True,
    SettingKey.EVAL_USE_VIEW_DATE: True,
    SettingKey.EVAL_MIN_TIME_DIFF_BETWEEN_START_DUE: 8,
    SettingKey.RESPONSES_REQUIRED_TO_VIEW_RESULTS: 5,
    SettingKey.FROM_EMAIL_ADDRESS: "evaluations@local.test",
}


def get_or_create_user(db: Session, email: str, full_name: str, is_admin: bool = False) -> User:
    u = db.query(User).filter(User.email == email).one_or_none()
    if u:
        # keep these up to date in dev
        changed = False
        if u.full_name != full_name:
            u.full_name = full_name
            changed = True
        if u.is_admin != is_admin:
            u.is_admin = is_admin
            changed = True
        if not u.is_active:
            u.is_active = True
            changed = True
        if changed:
            db.commit()
            db.refresh(u)
        return u

    u = User(email=email, full_name=full_name, is_active=True, is_admin=is_admin)
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        admin_user = get_or_create_user(db, "admin@local.test", "Admin", is_admin=True)
        instructor_user = get_or_create_user(db, "instructor@local.test", "Instructor")

        provider = DbSettingsProvider(db)
        for key, value in DEV_SETTINGS.items():
            provider.set(key, value, actor=admin_user)
        db.commit()

        print("\n=== DEV SEED COMPLETE ===")
        print("Users:")
        print(f"  admin:      {admin_user.email}")
        print(f"  instructor: {instructor_user.email}")

        print("\nSettings:")
        for key, value in DEV_SETTINGS.items():
            print(f"  {key.value} = {value!r}")

        print("\nNext API steps (Postman):")
        print("  POST /evaluations/defaults        (as admin@local.test)")
        print("  POST /evaluations/prepare         (body: the evaluation returned above)")
        print("  POST /evaluations/instructor-view (as instructor@local.test)")

    finally:
        db.close()


if __name__ == "__main__":
    main()

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from evalsys.core.eval_settings import SettingKey
from evalsys.core.security import get_current_user, require_admin
from evalsys.core.settings_store import DbSettingsProvider
from evalsys.db.session import get_db
from evalsys.models.user import User
from evalsys.schemas.rules import SettingOut, SettingUpdate

router = APIRouter(prefix="/settings", tags=["settings"])


def _key_or_404(key: str) -> SettingKey:
    try:
        return SettingKey(key.upper())
    except ValueError:
        raise HTTPException(status_code=404, detail="Unknown setting")


def to_out(provider: DbSettingsProvider, key: SettingKey) -> SettingOut:
    return SettingOut(
        key=key.value,
        value=provider.get(key),
        default=key.default,
        overridden=provider.is_overridden(key),
    )


@router.get("", response_model=list[SettingOut])
def list_settings(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """Effective value of every system setting."""
    provider = DbSettingsProvider(db)
    return [to_out(provider, key) for key in SettingKey]


@router.get("/{key}", response_model=SettingOut)
def get_setting(
    key: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return to_out(DbSettingsProvider(db), _key_or_404(key))


@router.put("/{key}", response_model=SettingOut)
def update_setting(
    key: str,
    payload: SettingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    setting_key = _key_or_404(key)
    provider = DbSettingsProvider(db)
    try:
        provider.set(setting_key, payload.value, actor=current_user)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(e), "field": setting_key.value, "code": "invalid_setting"},
        )
    db.commit()
    return to_out(provider, setting_key)


@router.delete("/{key}", response_model=SettingOut)
def reset_setting(
    key: str,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Drop the override so the documented default applies again."""
    setting_key = _key_or_404(key)
    provider = DbSettingsProvider(db)
    provider.clear(setting_key)
    db.commit()
    return to_out(provider, setting_key)

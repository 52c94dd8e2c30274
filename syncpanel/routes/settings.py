"""Settings document routes."""
import json

from fastapi import APIRouter, Depends
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from syncpanel.database import get_db
from syncpanel.logging_config import get_logger
from syncpanel.models import Setting
from syncpanel.schemas.settings import MailchimpSetting, SettingsEnvelope
from syncpanel.utils import error_response

logger = get_logger("syncpanel.routes.settings")

router = APIRouter(prefix="/settings", tags=["settings"])


def _document(db) -> dict:
    rows = db.query(Setting).order_by(Setting.key.asc()).all()
    return {"settings": [{"key": s.key, "value": s.value} for s in rows]}


def _validation_message(exc: ValidationError) -> str:
    first = exc.errors()[0]
    msg = first.get("msg", "Invalid value")
    return msg.removeprefix("Value error, ")


def _validate(key: str, value: str | None) -> str | None:
    """Return an error message for invalid values of known keys."""
    if key != "mailchimp" or value is None:
        return None
    try:
        MailchimpSetting.model_validate(json.loads(value))
    except json.JSONDecodeError:
        return "Mailchimp settings must be valid JSON"
    except ValidationError as e:
        return _validation_message(e)
    return None


@router.get("")
def get_settings(db=Depends(get_db)):
    return _document(db)


@router.put("")
def update_settings(body: SettingsEnvelope, db=Depends(get_db)):
    for item in body.settings:
        message = _validate(item.key, item.value)
        if message:
            logger.info("Rejected %s setting: %s", item.key, message)
            return error_response(422, "ValidationError", message)

    try:
        for item in body.settings:
            setting = db.query(Setting).filter(Setting.key == item.key).first()
            if setting:
                setting.value = item.value
            else:
                db.add(Setting(key=item.key, value=item.value))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Saving settings failed: %s", e)
        return error_response(500, "InternalServerError", "Settings could not be saved")

    logger.info("Updated settings: %s", ", ".join(i.key for i in body.settings))
    return _document(db)

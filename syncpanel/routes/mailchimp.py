"""Mailchimp lookup routes used by the settings panel."""
from fastapi import APIRouter, Depends, Query

from syncpanel.logging_config import get_logger
from syncpanel.panel.errors import ListProviderError
from syncpanel.schemas.settings import MailchimpListsResponse
from syncpanel.services.mailchimp import MailchimpListProvider
from syncpanel.utils import error_response

logger = get_logger("syncpanel.routes.mailchimp")

router = APIRouter(prefix="/mailchimp", tags=["mailchimp"])


def get_list_provider() -> MailchimpListProvider:
    return MailchimpListProvider()


@router.get("/lists", response_model=MailchimpListsResponse)
async def get_lists(
    api_key: str = Query(..., alias="apiKey"),
    provider=Depends(get_list_provider),
):
    try:
        lists = await provider.fetch_lists(api_key)
    except ListProviderError as e:
        logger.info("Mailchimp list lookup failed: %s", e.reason)
        return error_response(422, "ValidationError", e.reason)
    return {"lists": [item.to_dict() for item in lists]}

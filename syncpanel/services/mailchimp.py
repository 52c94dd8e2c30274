"""
Mailchimp list lookup.

Only the lists endpoint is used: given an API key, return the account's
mailing lists in the order Mailchimp reports them. The datacenter is the
suffix of the key ("<hash>-us6" -> https://us6.api.mailchimp.com).
"""
import re

import httpx

from syncpanel.config import settings
from syncpanel.logging_config import get_logger
from syncpanel.panel.errors import ListProviderError
from syncpanel.panel.integration import MailingList

logger = get_logger("syncpanel.services.mailchimp")

USER_AGENT = "Syncpanel/1.0"
API_KEY_PATTERN = re.compile(r"^[^\s-]+-(?P<dc>[a-z]+[0-9]+)$")


def datacenter_for(api_key: str) -> str:
    """Datacenter prefix for a key. Raises ListProviderError for malformed keys."""
    match = API_KEY_PATTERN.match(api_key.strip())
    if not match:
        raise ListProviderError("Invalid API key format")
    return match.group("dc")


class MailchimpListProvider:
    def __init__(self, transport: httpx.AsyncBaseTransport | None = None, timeout: float | None = None):
        self.transport = transport
        self.timeout = settings.mailchimp_timeout if timeout is None else timeout

    def _base_url(self, api_key: str) -> str:
        return f"https://{datacenter_for(api_key)}.api.mailchimp.com{settings.mailchimp_api_path}"

    async def fetch_lists(self, api_key: str) -> list[MailingList]:
        url = f"{self._base_url(api_key)}/lists"
        params = {"count": settings.mailchimp_list_count, "fields": "lists.id,lists.name"}
        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                resp = await client.get(
                    url,
                    params=params,
                    auth=("syncpanel", api_key.strip()),
                    headers={"User-Agent": USER_AGENT},
                )
        except httpx.HTTPError as e:
            logger.warning("Mailchimp request failed: %s", e)
            raise ListProviderError("Unable to reach Mailchimp") from e

        if resp.status_code == 401:
            raise ListProviderError("API Key Invalid")
        if resp.status_code != 200:
            raise ListProviderError(_error_detail(resp))

        data = resp.json()
        lists = [
            MailingList(id=str(item["id"]), name=item.get("name") or "")
            for item in data.get("lists", [])
            if item.get("id")
        ]
        logger.debug("Fetched %d Mailchimp lists", len(lists))
        return lists


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return f"Mailchimp error {resp.status_code}"
    return body.get("detail") or body.get("title") or f"Mailchimp error {resp.status_code}"

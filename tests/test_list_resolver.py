import asyncio

from syncpanel.panel import IntegrationConfig, ListResolver, MailingList, ValidationStatus
from syncpanel.panel.list_resolver import reconcile


def _resolver(provider, api_key="valid", active_list=None):
    model = IntegrationConfig(api_key=api_key, active_list=active_list)
    return model, ListResolver(model, provider)


def test_selects_first_list_without_prior_selection(provider):
    model, resolver = _resolver(provider)
    asyncio.run(resolver.resolve())
    assert model.validation.status == ValidationStatus.VALID
    assert model.active_list == MailingList(id="test1", name="Test List One")
    assert [item.id for item in resolver.available_lists] == ["test1", "test2"]


def test_keeps_prior_selection_when_present(provider):
    model, resolver = _resolver(provider, active_list=MailingList(id="test2", name="Old name"))
    asyncio.run(resolver.resolve())
    # name refreshed from the provider
    assert model.active_list == MailingList(id="test2", name="Test List Two")


def test_selects_first_list_if_prior_selection_missing(provider):
    model, resolver = _resolver(provider, api_key="valid2", active_list=MailingList(id="test1", name="x"))
    asyncio.run(resolver.resolve())
    assert model.active_list.id == "test3"


def test_clears_selection_when_no_lists(provider):
    model, resolver = _resolver(provider, api_key="empty", active_list=MailingList(id="test1", name="x"))
    asyncio.run(resolver.resolve())
    assert model.validation.status == ValidationStatus.VALID
    assert model.active_list is None


def test_provider_error_marks_key_invalid_and_keeps_list(provider):
    selected = MailingList(id="test1", name="Test List One")
    model, resolver = _resolver(provider, api_key="bogus", active_list=selected)
    result = asyncio.run(resolver.resolve())
    assert result.status == ValidationStatus.INVALID
    assert result.reason == "API Key Invalid"
    assert model.active_list == selected


def test_resolution_is_idempotent(provider):
    model, resolver = _resolver(provider, active_list=MailingList(id="test2", name="Test List Two"))

    async def twice():
        await resolver.resolve()
        first = model.snapshot()
        await resolver.resolve()
        return first, model.snapshot()

    first, second = asyncio.run(twice())
    assert first == second
    assert provider.calls == ["valid", "valid"]


def test_empty_key_is_not_sent_to_provider(provider):
    model, resolver = _resolver(provider, api_key="")
    result = asyncio.run(resolver.resolve())
    assert result.status == ValidationStatus.UNVALIDATED
    assert provider.calls == []


def test_result_for_superseded_key_is_discarded():
    class SlowProvider:
        def __init__(self):
            self.release = None

        async def fetch_lists(self, api_key):
            await self.release.wait()
            return [MailingList(id="old", name="Old")]

    provider = SlowProvider()
    model, resolver = _resolver(provider, api_key="first")

    async def scenario():
        provider.release = asyncio.Event()
        task = asyncio.create_task(resolver.resolve())
        await asyncio.sleep(0)
        assert model.validation.status == ValidationStatus.VALIDATING
        model.set_api_key("second")
        provider.release.set()
        await task

    asyncio.run(scenario())
    assert model.active_list is None
    assert model.validation.status == ValidationStatus.UNVALIDATED
    assert resolver.available_lists == []


def test_reconcile_preserves_order():
    lists = [MailingList(id="b", name="B"), MailingList(id="a", name="A")]
    assert reconcile(None, lists).id == "b"
    assert reconcile(MailingList(id="a", name="A"), lists).id == "a"
    assert reconcile(MailingList(id="a", name="A"), []) is None

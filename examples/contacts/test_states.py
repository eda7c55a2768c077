"""Tests for the contacts example — out-of-order declarations resolve fully."""

import pytest


class TestContactsTree:
    def test_everything_resolved(self, example_registry) -> None:
        assert example_registry.frozen is True
        assert example_registry.pending == {}
        assert [s.name for s in example_registry] == [
            "",
            "contacts",
            "contacts.detail",
            "contacts.detail.edit",
            "contacts.list",
            "home",
            "about",
            "print",
        ]

    def test_urls(self, example_registry) -> None:
        urls = {s.name: s.url.pattern for s in example_registry if s.url is not None}
        assert urls["contacts.detail"] == "/contacts/{contact_id:int}"
        assert urls["contacts.list"] == "/contacts/?sort&page"
        assert urls["about"] == "/about"
        assert urls["print"] == "/print/{contact_id:int}"

    def test_edit_inherits_from_detail(self, example_registry) -> None:
        edit = example_registry.get("contacts.detail.edit")
        assert edit.params == ("contact_id",)
        assert edit.own_params == ()
        assert edit.navigable is example_registry.get("contacts.detail")
        assert dict(edit.data) == {"section": "people", "editing": True}

    def test_views(self, example_registry) -> None:
        detail = example_registry.get("contacts.detail")
        assert set(detail.views) == {"@contacts", "hint@"}
        edit = example_registry.get("contacts.detail.edit")
        assert edit.views["@contacts.detail"]["template"] == "contacts/edit.html"

    def test_relative_lookup(self, example_registry) -> None:
        detail = example_registry.get("contacts.detail")
        assert example_registry.find_state("^.list", detail).name == "contacts.list"
        assert example_registry.find_state(".edit", detail).name == "contacts.detail.edit"

    def test_links(self, example_registry) -> None:
        detail = example_registry.get("contacts.detail")
        assert detail.url.format(contact_id=7) == "/contacts/7"
        listing = example_registry.get("contacts.list")
        assert listing.url.format(page=2) == "/contacts/?page=2"

    def test_frozen(self, example_registry) -> None:
        with pytest.raises(RuntimeError):
            example_registry.state("late")

"""Unit tests for the localized message catalog."""

import pytest

from travel_admin.domain.messages import MessageCatalog


def test_arabic_is_the_default():
    assert MessageCatalog().get("not_found", "clients") == "لم يتم العثور على العميل"


def test_plural_label_is_used_for_lists():
    messages = MessageCatalog("en")
    assert messages.get("fetch_many_failed", "hotels") == (
        "An error occurred while loading the hotels list. Please try again."
    )


def test_unknown_collection_falls_back_to_its_name():
    assert MessageCatalog("en").get("not_found", "visas") == "The visas was not found"


def test_unsupported_locale():
    with pytest.raises(ValueError):
        MessageCatalog("fr")

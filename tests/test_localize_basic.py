import pytest

from linkage.context import Locale, Space
from linkage.models import Asset, Entry, Resource
from linkage.stages.localize import localize, localize_items

SPACE = Space(locales=(Locale(code="en-US", default=True), Locale(code="tlh")))


def test_localize_builds_per_locale_maps():
    e = Entry(
        sys={"id": "e1", "type": "Entry"},
        raw_fields={
            "title": {"en-US": "Hello", "tlh": "nuqneH"},
            "body": {"en-US": "Text"},
            "empty": {"en-US": None},
        },
    )
    localize(e, SPACE.locales)
    assert e.localized_fields["en-US"] == {"title": "Hello", "body": "Text"}
    assert e.localized_fields["tlh"] == {"title": "nuqneH"}
    assert "body" not in e.localized_fields["tlh"]


def test_localize_replaces_stale_maps_and_covers_every_locale():
    e = Entry(sys={"id": "e1", "type": "Entry"}, raw_fields={})
    e.localized_fields["en-US"] = {"stale": 1}
    localize(e, SPACE.locales)
    assert e.localized_fields == {"en-US": {}, "tlh": {}}


def test_localize_skips_non_mapping_raw_values():
    e = Entry(sys={"id": "e1", "type": "Entry"}, raw_fields={"bad": "flat", "ok": {"en-US": 1}})
    localize(e, SPACE.locales)
    assert e.localized_fields["en-US"] == {"ok": 1}


def test_localize_items_sets_default_locale():
    a = Asset(sys={"id": "a1", "type": "Asset"}, raw_fields={"title": {"en-US": "Pic", "tlh": "mIllogh"}})
    plain = Resource(sys={"id": "s", "type": "Space"})
    n = localize_items([a, plain], SPACE)
    assert n == 1
    assert a.locale == "en-US"
    assert a.get_field("title") == "Pic"
    a.set_locale("tlh")
    assert a.get_field("title") == "mIllogh"


def test_model_helpers():
    e = Entry(sys={"id": "e1", "type": "Entry", "contentType": {"sys": {"id": "cat"}}})
    assert e.content_type_id == "cat"
    assert e.fields == {}
    with pytest.raises(KeyError):
        e.set_locale("fr-FR")
    a = Asset(
        sys={"id": "a1", "type": "Asset"},
        localized_fields={"en-US": {"file": {"url": "//x.png", "contentType": "image/png"}}},
        locale="en-US",
    )
    assert a.mime_type == "image/png"
    assert a.type.value == "Asset"

"""
Tests for link reconciliation: planning (pure) and applying (over a fake port).
"""

import pytest

from linkhub.adapters.http.errors import ServerError
from linkhub.components.links import (
    DuplicateLinkError,
    apply_plan,
    find_duplicate_keys,
    is_absolute_url,
    link_payload,
    plan_reconciliation,
    run_reconcile,
    validate_link_data,
)
from linkhub.domain.entities import Link, LinkDraft


class FakeLinkApi:
    """In-memory link store for one page."""

    def __init__(self, links: list[Link] | None = None) -> None:
        self.links = {link.id: link for link in links or []}
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()
        self._next_id = 100

    def list_for_page(self, page_id):
        self.calls.append(("list", page_id))
        return list(self.links.values())

    def create(self, payload):
        self.calls.append(("create", payload["platform"], payload["url"]))
        if "create" in self.fail_on:
            raise ServerError("boom", 500)
        self._next_id += 1
        link = Link(id=self._next_id, **payload)
        self.links[link.id] = link
        return link

    def update(self, link_id, payload):
        self.calls.append(("update", link_id))
        if "update" in self.fail_on:
            raise ServerError("boom", 500)
        self.links[link_id] = self.links[link_id].model_copy(update=payload)

    def delete(self, link_id):
        self.calls.append(("delete", link_id))
        if "delete" in self.fail_on:
            raise ServerError("boom", 500)
        del self.links[link_id]

    def writes(self):
        return [c for c in self.calls if c[0] != "list"]


def link(id, platform, url, title=None):
    return Link(id=id, platform=platform, url=url, title=title, page_id=1)


def draft(platform, url, title=None):
    return LinkDraft(platform=platform, url=url, title=title)


# --- Planning ---


class TestPlanReconciliation:
    def test_delete_stale_create_new_keep_matching(self):
        persisted = [
            link(1, "facebook", "https://facebook.com/a"),
            link(2, "github", "https://github.com/b"),
        ]
        desired = [
            draft("facebook", "https://facebook.com/a"),
            draft("twitter", "https://twitter.com/c"),
        ]

        plan = plan_reconciliation(persisted, desired)

        assert [ln.id for ln in plan.deletes] == [2]
        assert [d.key for d in plan.creates] == [("twitter", "https://twitter.com/c")]
        assert plan.updates == ()
        assert [ln.id for ln in plan.unchanged] == [1]

    def test_identical_sets_plan_nothing(self):
        persisted = [link(1, "github", "https://github.com/a", title="Code")]
        plan = plan_reconciliation(persisted, [draft("github", "https://github.com/a", "Code")])

        assert plan.is_empty
        assert plan.operation_count == 0

    def test_order_is_ignored(self):
        persisted = [
            link(1, "github", "https://github.com/a"),
            link(2, "youtube", "https://youtube.com/b"),
        ]
        desired = [
            draft("youtube", "https://youtube.com/b"),
            draft("github", "https://github.com/a"),
        ]

        assert plan_reconciliation(persisted, desired).is_empty

    def test_changed_title_is_an_update(self):
        persisted = [link(1, "github", "https://github.com/a", title="Old")]
        plan = plan_reconciliation(persisted, [draft("github", "https://github.com/a", "New")])

        assert [(u.link_id, u.draft.title) for u in plan.updates] == [(1, "New")]
        assert plan.creates == ()
        assert plan.deletes == ()

    def test_empty_title_matches_missing_title(self):
        persisted = [link(1, "github", "https://github.com/a", title="")]
        plan = plan_reconciliation(persisted, [draft("github", "https://github.com/a")])

        assert plan.is_empty

    def test_changed_url_is_delete_plus_create(self):
        persisted = [link(1, "github", "https://github.com/old")]
        plan = plan_reconciliation(persisted, [draft("github", "https://github.com/new")])

        assert [ln.id for ln in plan.deletes] == [1]
        assert [d.url for d in plan.creates] == ["https://github.com/new"]

    def test_empty_working_set_deletes_everything(self):
        persisted = [link(1, "github", "https://github.com/a"), link(2, "x", "https://x.com/b")]
        plan = plan_reconciliation(persisted, [])

        assert {ln.id for ln in plan.deletes} == {1, 2}

    def test_duplicate_persisted_keys_keep_first(self):
        persisted = [
            link(1, "github", "https://github.com/a"),
            link(2, "github", "https://github.com/a"),
        ]
        plan = plan_reconciliation(persisted, [draft("github", "https://github.com/a")])

        assert [ln.id for ln in plan.deletes] == [2]
        assert [ln.id for ln in plan.unchanged] == [1]
        assert plan.creates == ()

    def test_duplicate_desired_keys_rejected(self):
        desired = [draft("github", "https://github.com/a"), draft("github", "https://github.com/a")]

        with pytest.raises(DuplicateLinkError) as exc:
            plan_reconciliation([], desired)

        assert exc.value.keys == [("github", "https://github.com/a")]

    def test_persisted_without_id_is_ignored(self):
        persisted = [Link(id=None, platform="github", url="https://github.com/a")]
        plan = plan_reconciliation(persisted, [])

        assert plan.deletes == ()

    def test_persisted_without_id_is_not_created_again(self):
        anonymous = Link(id=None, platform="github", url="https://github.com/a")
        plan = plan_reconciliation(
            [anonymous], [LinkDraft(platform="github", url="https://github.com/a")]
        )

        assert plan.creates == ()
        assert plan.unchanged == (anonymous,)


# --- Applying ---


def test_apply_orders_deletes_then_updates_then_creates():
    api = FakeLinkApi([
        link(1, "facebook", "https://facebook.com/a", title="Old"),
        link(2, "github", "https://github.com/b"),
    ])
    desired = [
        draft("twitter", "https://twitter.com/c"),
        draft("facebook", "https://facebook.com/a", title="New"),
    ]

    result = run_reconcile(1, desired, api)

    assert result.success is True
    assert api.writes() == [
        ("delete", 2),
        ("update", 1),
        ("create", "twitter", "https://twitter.com/c"),
    ]
    assert [op.kind for op in result.applied] == ["delete", "update", "create"]


def test_second_save_is_a_no_op():
    api = FakeLinkApi([
        link(1, "facebook", "https://facebook.com/a"),
        link(2, "github", "https://github.com/b"),
    ])
    desired = [draft("facebook", "https://facebook.com/a"), draft("twitter", "https://twitter.com/c")]

    run_reconcile(1, desired, api)
    api.calls.clear()
    again = run_reconcile(1, desired, api)

    assert again.success is True
    assert again.plan.is_empty
    assert api.writes() == []


def test_failure_stops_and_reports_progress():
    api = FakeLinkApi([link(1, "github", "https://github.com/a")])
    api.fail_on.add("create")
    desired = [draft("twitter", "https://twitter.com/c"), draft("youtube", "https://youtube.com/d")]

    result = run_reconcile(1, desired, api)

    assert result.success is False
    assert result.error == "boom"
    # delete went through; the first create failed; nothing after it ran
    assert [op.kind for op in result.applied] == ["delete"]
    assert api.writes() == [("delete", 1), ("create", "twitter", "https://twitter.com/c")]


def test_retry_after_partial_failure_converges():
    api = FakeLinkApi([link(1, "github", "https://github.com/a")])
    desired = [draft("twitter", "https://twitter.com/c"), draft("youtube", "https://youtube.com/d")]
    api.fail_on.add("create")
    run_reconcile(1, desired, api)

    api.fail_on.clear()
    result = run_reconcile(1, desired, api)

    assert result.success is True
    assert sorted(ln.key for ln in api.links.values()) == [
        ("twitter", "https://twitter.com/c"),
        ("youtube", "https://youtube.com/d"),
    ]


def test_list_failure_reports_error_without_writes():
    api = FakeLinkApi()

    def broken(page_id):
        raise ServerError("down", 503)

    api.list_for_page = broken
    result = run_reconcile(1, [draft("github", "https://github.com/a")], api)

    assert result.success is False
    assert result.error == "down"
    assert api.writes() == []


def test_apply_empty_plan_succeeds():
    api = FakeLinkApi()
    result = apply_plan(plan_reconciliation([], []), 1, api)

    assert result.success is True
    assert result.applied == []


def test_create_payload_carries_page_id():
    assert link_payload(draft("github", "https://github.com/a"), page_id=5) == {
        "platform": "github",
        "url": "https://github.com/a",
        "page_id": 5,
    }
    assert link_payload(draft("github", "https://github.com/a", "Code")) == {
        "platform": "github",
        "url": "https://github.com/a",
        "title": "Code",
    }


# --- Validation ---


@pytest.mark.parametrize(
    "url,ok",
    [
        ("https://github.com/a", True),
        ("http://example.com", True),
        ("github.com/a", False),
        ("ftp://example.com", False),
        ("https://", False),
        ("https://exa mple.com", False),
        ("", False),
    ],
)
def test_is_absolute_url(url, ok):
    assert is_absolute_url(url) is ok


def test_validate_link_data_codes():
    assert validate_link_data(platform="github", url="https://github.com/a") == []

    errors = validate_link_data(platform=" ", url="", field_prefix="links[0].")
    assert [(e.code, e.field) for e in errors] == [
        ("platform_required", "links[0].platform"),
        ("url_required", "links[0].url"),
    ]

    (invalid,) = validate_link_data(platform="github", url="not a url")
    assert invalid.code == "url_invalid"
    assert invalid.message == "Please enter a valid URL"


def test_find_duplicate_keys_first_seen_order():
    links = [
        draft("x", "https://x.com/b"),
        draft("github", "https://github.com/a"),
        draft("github", "https://github.com/a"),
        draft("x", "https://x.com/b"),
        draft("x", "https://x.com/b"),
    ]
    assert find_duplicate_keys(links) == [
        ("github", "https://github.com/a"),
        ("x", "https://x.com/b"),
    ]

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for annotations and the synced-entity lifecycle they share."""

import pytest
from pydantic import ValidationError

from ag_client.core.exceptions import NotFound, RemoteRejected, RemoteUnavailable
from ag_client.domains.handgrading import Annotation, NewAnnotationData


@pytest.fixture
def annotation_record(records):
    return records.annotation(1, last_modified="t0")


@pytest.fixture
def served_annotation(server, annotation_record):
    server.route("GET", "/annotations/1/", json=annotation_record)
    return annotation_record


class TestCreate:
    """Tests for Annotation.create."""

    @pytest.mark.asyncio
    async def test_create_notifies_created_once(self, client, server, recorder, records):
        server.route(
            "POST",
            "/handgrading_rubrics/5/annotations/",
            json=records.annotation(7),
            status=201,
        )
        Annotation.subscribe(client, recorder)

        annotation = await Annotation.create(
            client,
            5,
            NewAnnotationData(short_description="Magic number", deduction=-1),
        )

        assert recorder.names() == ["on_annotation_created"]
        assert recorder.last_args("on_annotation_created") == (annotation,)
        assert annotation.pk == 7
        assert annotation.client is client

    @pytest.mark.asyncio
    async def test_create_sends_only_given_fields(self, client, server, records):
        server.route(
            "POST",
            "/handgrading_rubrics/5/annotations/",
            json=records.annotation(7),
            status=201,
        )

        await Annotation.create(client, 5, NewAnnotationData(short_description="Magic number"))

        assert server.last_json("POST", "/handgrading_rubrics/5/annotations/") == {
            "short_description": "Magic number",
        }

    @pytest.mark.asyncio
    async def test_rejected_create_fires_nothing(self, client, server, recorder):
        server.route(
            "POST",
            "/handgrading_rubrics/5/annotations/",
            json={"deduction": ["Ensure this value is less than or equal to 0."]},
            status=400,
        )
        Annotation.subscribe(client, recorder)

        with pytest.raises(RemoteRejected) as exc_info:
            await Annotation.create(client, 5, NewAnnotationData(deduction=3))

        assert "deduction" in exc_info.value.details
        assert recorder.events == []


class TestGet:
    """Tests for loading annotations."""

    @pytest.mark.asyncio
    async def test_get_by_pk(self, client, served_annotation):
        annotation = await Annotation.get_by_pk(client, 1)

        assert annotation.short_description == "Magic number"
        assert annotation.version == "t0"

    @pytest.mark.asyncio
    async def test_get_all_keeps_server_order(self, client, server, records):
        server.route(
            "GET",
            "/handgrading_rubrics/5/annotations/",
            json=[records.annotation(3), records.annotation(1), records.annotation(2)],
        )

        annotations = await Annotation.get_all_from_handgrading_rubric(client, 5)

        assert [annotation.pk for annotation in annotations] == [3, 1, 2]

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, client):
        with pytest.raises(NotFound):
            await Annotation.get_by_pk(client, 404)

    @pytest.mark.asyncio
    async def test_get_fires_no_events(self, client, recorder, served_annotation):
        Annotation.subscribe(client, recorder)

        await Annotation.get_by_pk(client, 1)

        assert recorder.events == []


class TestRefresh:
    """Tests for Annotation.refresh."""

    @pytest.mark.asyncio
    async def test_refresh_unchanged_then_changed(self, client, recorder, served_annotation):
        annotation = await Annotation.get_by_pk(client, 1)
        Annotation.subscribe(client, recorder)

        await annotation.refresh()
        assert recorder.events == []

        served_annotation["last_modified"] = "t1"
        served_annotation["short_description"] = "Hardcoded constant"
        await annotation.refresh()

        assert recorder.names() == ["on_annotation_changed"]
        assert annotation.version == "t1"
        assert annotation.short_description == "Hardcoded constant"

    @pytest.mark.asyncio
    async def test_repeated_refresh_without_server_change_is_silent(
        self, client, recorder, served_annotation
    ):
        annotation = await Annotation.get_by_pk(client, 1)
        Annotation.subscribe(client, recorder)

        await annotation.refresh()
        await annotation.refresh()

        assert recorder.events == []

    @pytest.mark.asyncio
    async def test_refresh_discards_unsaved_edits(self, client, served_annotation):
        annotation = await Annotation.get_by_pk(client, 1)
        annotation.short_description = "local only"

        await annotation.refresh()

        assert annotation.short_description == "Magic number"

    @pytest.mark.asyncio
    async def test_failed_refresh_leaves_entity_untouched(
        self, client, server, recorder, served_annotation
    ):
        annotation = await Annotation.get_by_pk(client, 1)
        Annotation.subscribe(client, recorder)
        server.route("GET", "/annotations/1/", status=502)

        with pytest.raises(RemoteUnavailable):
            await annotation.refresh()

        assert annotation.version == "t0"
        assert recorder.events == []

    @pytest.mark.asyncio
    async def test_malformed_response_leaves_entity_untouched(
        self, client, server, recorder, served_annotation
    ):
        annotation = await Annotation.get_by_pk(client, 1)
        Annotation.subscribe(client, recorder)
        server.route("GET", "/annotations/1/", json={"pk": 1, "deduction": "lots"})

        with pytest.raises(ValidationError):
            await annotation.refresh()

        assert annotation.deduction == -1
        assert recorder.events == []


class TestSave:
    """Tests for Annotation.save."""

    @pytest.mark.asyncio
    async def test_save_sends_exactly_the_editable_fields(self, client, server, served_annotation):
        server.route("PATCH", "/annotations/1/", json=served_annotation)
        annotation = await Annotation.get_by_pk(client, 1)
        annotation.deduction = -2
        annotation.handgrading_rubric = 99

        await annotation.save()

        assert server.last_json("PATCH", "/annotations/1/") == {
            "short_description": "Magic number",
            "long_description": "Use a named constant instead",
            "deduction": -2,
            "max_deduction": -3,
        }

    @pytest.mark.asyncio
    async def test_save_notifies_even_when_version_is_unchanged(
        self, client, server, recorder, served_annotation
    ):
        server.route("PATCH", "/annotations/1/", json=served_annotation)
        annotation = await Annotation.get_by_pk(client, 1)
        Annotation.subscribe(client, recorder)

        await annotation.save()

        assert recorder.names() == ["on_annotation_changed"]
        assert annotation.version == "t0"

    @pytest.mark.asyncio
    async def test_save_merges_server_response(self, client, server, records, served_annotation):
        saved = records.annotation(1, last_modified="t1", deduction=-2, long_description="Normalized")
        server.route("PATCH", "/annotations/1/", json=saved)
        annotation = await Annotation.get_by_pk(client, 1)
        annotation.deduction = -2

        await annotation.save()

        assert annotation.version == "t1"
        assert annotation.long_description == "Normalized"

    @pytest.mark.asyncio
    async def test_observers_see_merged_state(self, client, server, records, served_annotation):
        saved = records.annotation(1, last_modified="t1", deduction=-2)
        server.route("PATCH", "/annotations/1/", json=saved)
        annotation = await Annotation.get_by_pk(client, 1)
        seen = []

        class Watcher:
            def on_annotation_changed(self, changed):
                seen.append((changed is annotation, changed.version))

        Annotation.subscribe(client, Watcher())
        await annotation.save()

        assert seen == [(True, "t1")]

    @pytest.mark.asyncio
    async def test_rejected_save_keeps_local_state_and_fires_nothing(
        self, client, server, recorder, served_annotation
    ):
        server.route("PATCH", "/annotations/1/", json={"deduction": ["Invalid"]}, status=400)
        annotation = await Annotation.get_by_pk(client, 1)
        Annotation.subscribe(client, recorder)
        annotation.deduction = 5

        with pytest.raises(RemoteRejected):
            await annotation.save()

        assert annotation.deduction == 5
        assert annotation.version == "t0"
        assert recorder.events == []

    @pytest.mark.asyncio
    async def test_pk_cannot_be_reassigned(self, client, served_annotation):
        annotation = await Annotation.get_by_pk(client, 1)

        with pytest.raises(ValidationError):
            annotation.pk = 2

    @pytest.mark.asyncio
    async def test_response_for_another_resource_is_refused(
        self, client, server, records, served_annotation
    ):
        server.route("PATCH", "/annotations/1/", json=records.annotation(2))
        annotation = await Annotation.get_by_pk(client, 1)

        with pytest.raises(ValueError, match="pk=2"):
            await annotation.save()

        assert annotation.pk == 1


class TestDelete:
    """Tests for Annotation.delete."""

    @pytest.mark.asyncio
    async def test_delete_notifies_deleted_once(self, client, server, recorder, served_annotation):
        server.route("DELETE", "/annotations/1/", status=204)
        annotation = await Annotation.get_by_pk(client, 1)
        Annotation.subscribe(client, recorder)

        await annotation.delete()

        assert recorder.names() == ["on_annotation_deleted"]
        assert recorder.last_args("on_annotation_deleted") == (annotation,)
        assert annotation.short_description == "Magic number"

    @pytest.mark.asyncio
    async def test_refresh_after_delete_surfaces_not_found(
        self, client, server, recorder, served_annotation
    ):
        server.route("DELETE", "/annotations/1/", status=204)
        annotation = await Annotation.get_by_pk(client, 1)
        await annotation.delete()
        del server.routes[("GET", "/annotations/1/")]
        Annotation.subscribe(client, recorder)

        with pytest.raises(NotFound):
            await annotation.refresh()

        assert recorder.events == []


class TestSubscriptions:
    """Tests for observer subscription through entity types."""

    @pytest.mark.asyncio
    async def test_unsubscribed_observer_sees_nothing(
        self, client, server, recorder, records, served_annotation
    ):
        server.route("PATCH", "/annotations/1/", json=served_annotation)
        server.route("DELETE", "/annotations/1/", status=204)
        server.route(
            "POST",
            "/handgrading_rubrics/5/annotations/",
            json=records.annotation(8),
            status=201,
        )
        Annotation.subscribe(client, recorder)
        Annotation.unsubscribe(client, recorder)

        annotation = await Annotation.get_by_pk(client, 1)
        await Annotation.create(client, 5, NewAnnotationData())
        await annotation.save()
        served_annotation["last_modified"] = "t9"
        await annotation.refresh()
        await annotation.delete()

        assert recorder.events == []

    @pytest.mark.asyncio
    async def test_every_subscriber_notified_before_return(
        self, client, server, records
    ):
        server.route(
            "POST",
            "/handgrading_rubrics/5/annotations/",
            json=records.annotation(8),
            status=201,
        )
        log = []

        class Listener:
            def __init__(self, label):
                self.label = label

            def on_annotation_created(self, annotation):
                log.append(self.label)

        for label in ("first", "second"):
            Annotation.subscribe(client, Listener(label))

        await Annotation.create(client, 5, NewAnnotationData())

        assert log == ["first", "second"]

    @pytest.mark.asyncio
    async def test_subscribing_twice_delivers_once(self, client, server, recorder, records):
        server.route(
            "POST",
            "/handgrading_rubrics/5/annotations/",
            json=records.annotation(8),
            status=201,
        )
        Annotation.subscribe(client, recorder)
        Annotation.subscribe(client, recorder)

        await Annotation.create(client, 5, NewAnnotationData())

        assert recorder.count("on_annotation_created") == 1


class TestOrder:
    """Tests for annotation ordering within a rubric."""

    @pytest.mark.asyncio
    async def test_get_order(self, client, server):
        server.route("GET", "/handgrading_rubrics/5/annotations/order/", json=[3, 1, 2])

        assert await Annotation.get_order(client, 5) == [3, 1, 2]

    @pytest.mark.asyncio
    async def test_update_order_notifies_with_new_order(self, client, server, recorder):
        server.route("PUT", "/handgrading_rubrics/5/annotations/order/", json=[2, 1, 3])
        Annotation.subscribe(client, recorder)

        order = await Annotation.update_order(client, 5, [2, 1, 3])

        assert order == [2, 1, 3]
        assert server.last_json("PUT", "/handgrading_rubrics/5/annotations/order/") == [2, 1, 3]
        assert recorder.names() == ["on_annotation_order_changed"]
        assert recorder.last_args("on_annotation_order_changed") == ([2, 1, 3],)

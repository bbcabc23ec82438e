from __future__ import annotations

import uuid

from mediacat.services.identifiers import generate_media_id


def test_media_ids_are_uuid7_and_time_ordered():
    ids = [generate_media_id() for _ in range(50)]
    assert len(set(ids)) == len(ids)
    assert all(uuid.UUID(value).version == 7 for value in ids)
    assert ids == sorted(ids)

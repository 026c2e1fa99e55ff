"""Unit tests for the feed and event stores."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from laurier_connect.errors import EmptyContentError, InvalidInputError, InvalidRangeError, NotFoundError
from laurier_connect.models import Event, User
from laurier_connect.services import EventStore, FeedStore

START = datetime(2024, 11, 1, 18, 0, tzinfo=timezone.utc)


@pytest.fixture
def author() -> User:
    return User(id="200578934", full_name="John Smith", email="smit2090@mylaurier.ca", major="Computer Science")


@pytest.fixture
def reader() -> User:
    return User(id="200512345", full_name="Emma Wilson", email="wils1234@mylaurier.ca", major="Business")


def test_feed_is_newest_first_regardless_of_comments(author: User, reader: User) -> None:
    feed = FeedStore()
    first = feed.add_post("First day on campus", author)
    second = feed.add_post("Library is packed", reader)

    feed.add_comment(first.id, "Welcome!", reader)
    feed.add_comment(first.id, "Thanks", author)

    assert [post.id for post in feed.list_posts()] == [second.id, first.id]
    assert [comment.content for comment in feed.comments(first.id)] == ["Welcome!", "Thanks"]
    assert feed.comments(second.id) == ()


def test_add_comment_to_unknown_post_raises(author: User) -> None:
    feed = FeedStore()
    with pytest.raises(NotFoundError):
        feed.add_comment("missing", "hello", author)


def test_empty_posts_and_comments_rejected(author: User) -> None:
    feed = FeedStore()
    with pytest.raises(EmptyContentError):
        feed.add_post("   ", author)
    post = feed.add_post("ok", author)
    with pytest.raises(EmptyContentError):
        feed.add_comment(post.id, "", author)
    assert feed.get_post(post.id).comments == []


def test_event_end_equal_to_start_is_rejected(author: User) -> None:
    events = EventStore()
    with pytest.raises(InvalidRangeError):
        events.create_event(creator=author, title="Hackathon", location="Bricker", start_time=START, end_time=START)
    with pytest.raises(InvalidRangeError):
        events.create_event(
            creator=author, title="Hackathon", location="Bricker", start_time=START, end_time=START - timedelta(hours=1)
        )
    assert events.list_events() == []


def test_event_one_second_long_is_accepted(author: User) -> None:
    events = EventStore()
    event = events.create_event(
        creator=author,
        title="Hackathon",
        location="Bricker",
        start_time=START,
        end_time=START + timedelta(seconds=1),
    )
    assert events.list_events() == [event]
    assert [user.id for user in event.attendees] == [author.id]


def test_add_event_validates_prebuilt_event(author: User) -> None:
    events = EventStore()
    bad = Event(
        id="e1",
        title="Mixer",
        description="",
        location="",
        start_time=START,
        end_time=START + timedelta(hours=2),
        creator_id=author.id,
    )
    with pytest.raises(InvalidInputError):
        events.add_event(bad)


def test_events_keep_creation_order_and_attendance_is_idempotent(author: User, reader: User) -> None:
    events = EventStore()
    later = events.create_event(
        creator=author, title="Career fair", location="Concourse", start_time=START + timedelta(days=3),
        end_time=START + timedelta(days=3, hours=4),
    )
    sooner = events.create_event(
        creator=reader, title="Study jam", location="Library", start_time=START, end_time=START + timedelta(hours=2)
    )

    assert [event.id for event in events.list_events()] == [later.id, sooner.id]
    assert events.attend_event(later.id, reader) is True
    assert events.attend_event(later.id, reader) is False
    assert [user.id for user in events.get_event(later.id).attendees] == [author.id, reader.id]

    with pytest.raises(NotFoundError):
        events.attend_event("missing", reader)


def test_naive_datetimes_are_treated_as_utc(author: User) -> None:
    events = EventStore()
    event = events.create_event(
        creator=author,
        title="Naive",
        location="Online",
        start_time=datetime(2024, 1, 1, 9, 0),
        end_time=datetime(2024, 1, 1, 10, 0),
    )
    assert event.start_time.tzinfo is timezone.utc


def test_add_event_compares_naive_and_aware_times_as_utc(author: User) -> None:
    events = EventStore()
    instant = Event(
        id="e2",
        title="Zero length",
        description="",
        location="Online",
        start_time=datetime(2024, 1, 1, 9, 0),
        end_time=datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
        creator_id=author.id,
    )
    with pytest.raises(InvalidRangeError):
        events.add_event(instant)

    mixed = Event(
        id="e3",
        title="Office hours",
        description="",
        location="Bricker Academic",
        start_time=datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
        end_time=datetime(2024, 1, 1, 10, 0),
        creator_id=author.id,
    )
    stored = events.add_event(mixed)
    assert stored.end_time.tzinfo is timezone.utc
    assert [event.id for event in events.list_events()] == ["e3"]

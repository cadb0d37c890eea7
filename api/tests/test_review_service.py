import pytest

from app.config import settings
from app.models.travel_list import average_rating
from app.repositories.list_repository import ListRepository
from app.services.list_service import ListService
from app.services.review_service import ReviewService
from app.utils.errors import Conflict, Forbidden, InvalidComment, InvalidRating, NotFound


class AlwaysStaleRepository(ListRepository):
    """Every compare-and-set loses the race"""

    async def compare_and_set(self, travel_list, fields):
        return False


@pytest.fixture
async def trip(list_repository, owner):
    await ListService(list_repository).create_list("Trip", requester=owner, is_visible=True)
    return "Trip"


@pytest.fixture
def service(list_repository):
    return ReviewService(list_repository)


async def test_average_follows_each_review(service, trip, stranger):
    _, avg = await service.add_review(trip, 5, "great", author=stranger)
    assert avg == 5.0
    _, avg = await service.add_review(trip, 3, "ok", author=stranger)
    assert avg == 4.0
    review, avg = await service.add_review(trip, 4, "good", author=stranger)
    assert avg == 4.0
    assert review.user_name == "Stranger"

    stored = await service.repository.get(trip)
    assert stored.average_rating == 4.0
    assert [r.rating for r in stored.reviews] == [5, 3, 4]


async def test_comment_is_trimmed(service, trip, stranger):
    review, _ = await service.add_review(trip, 4, "  lovely  ", author=stranger)
    assert review.comment == "lovely"


async def test_zero_rating_is_accepted(service, trip, stranger):
    _, avg = await service.add_review(trip, 0, "awful", author=stranger)
    assert avg == 0


@pytest.mark.parametrize("rating", [6, -1, 5.5, None, "5", True])
async def test_invalid_rating_is_rejected(service, trip, stranger, rating):
    with pytest.raises(InvalidRating):
        await service.add_review(trip, rating, "text", author=stranger)
    assert (await service.repository.get(trip)).reviews == []


@pytest.mark.parametrize("comment", ["", "   ", None, 12])
async def test_invalid_comment_is_rejected(service, trip, stranger, comment):
    with pytest.raises(InvalidComment):
        await service.add_review(trip, 3, comment, author=stranger)


async def test_review_on_missing_list(service, stranger):
    with pytest.raises(NotFound):
        await service.add_review("Nope", 3, "text", author=stranger)


async def test_hidden_reviews_still_count_towards_average(service, trip, stranger):
    await service.add_review(trip, 5, "great", author=stranger)
    await service.add_review(trip, 1, "bad", author=stranger)

    hidden = await service.set_visibility(trip, 1, is_visible=False)
    assert hidden.is_visible is False

    visible = await service.list_reviews(trip)
    assert [r.comment for r in visible] == ["great"]
    assert (await service.repository.get(trip)).average_rating == 3.0

    await service.set_visibility(trip, 1, is_visible=True)
    assert len(await service.list_reviews(trip)) == 2


@pytest.mark.parametrize("index", [-1, 1, 10])
async def test_visibility_of_unknown_review(service, trip, stranger, index):
    await service.add_review(trip, 5, "great", author=stranger)
    with pytest.raises(NotFound):
        await service.set_visibility(trip, index, is_visible=False)


async def test_all_reviews_includes_hidden(service, trip, stranger):
    await service.add_review(trip, 5, "great", author=stranger)
    await service.add_review(trip, 2, "meh", author=stranger)
    await service.set_visibility(trip, 0, is_visible=False)

    entries = await service.all_reviews()
    assert [(e["list_name"], e["id"], e["review"].comment) for e in entries] == [
        ("Trip", 0, "great"),
        ("Trip", 1, "meh"),
    ]


async def test_lost_races_end_in_conflict(mongo_db, trip, stranger):
    service = ReviewService(AlwaysStaleRepository(mongo_db), write_attempts=2)
    with pytest.raises(Conflict):
        await service.add_review(trip, 5, "great", author=stranger)
    assert (await service.repository.get(trip)).reviews == []


@pytest.mark.parametrize(
    "ratings, expected",
    [
        ([], 0),
        ([4, 4.5], 4.3),
        ([5, 3, 4], 4.0),
        ([1, 2], 1.5),
        ([5, 4, 4], 4.3),
        ([0, 0, 1], 0.3),
    ],
)
def test_average_rating_rounds_half_up(ratings, expected):
    assert average_rating(ratings) == expected


async def test_reviews_of_private_list_are_for_the_owner_only(service, list_repository, owner, stranger):
    await ListService(list_repository).create_list("Secret", requester=owner)
    await service.add_review("Secret", 4, "quiet", author=stranger)

    with pytest.raises(Forbidden):
        await service.list_reviews("Secret")
    with pytest.raises(Forbidden):
        await service.list_reviews("Secret", requester=stranger)
    assert [r.comment for r in await service.list_reviews("Secret", requester=owner)] == ["quiet"]


def test_write_attempts_default_to_settings(list_repository):
    assert ReviewService(list_repository).write_attempts == settings.REVIEW_WRITE_ATTEMPTS
    assert ReviewService(list_repository, write_attempts=1).write_attempts == 1


async def test_zero_write_attempts_never_writes(list_repository, trip, stranger):
    service = ReviewService(list_repository, write_attempts=0)
    assert service.write_attempts == 0
    with pytest.raises(Conflict):
        await service.add_review(trip, 5, "great", author=stranger)
    assert (await list_repository.get(trip)).reviews == []

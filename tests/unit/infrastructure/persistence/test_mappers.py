from datetime import UTC, datetime

from limbo.domain.artist.model import Artist
from limbo.infrastructure.persistence.mappers import artist_to_row, row_to_artist


class TestArtistMappers:
    def test_unregistered_artist_mapping(self):
        artist = row_to_artist({"name": "Anna", "username": "Anna", "slug": "anna"})

        assert artist.username == "@anna"
        assert not artist.is_registered
        assert artist_to_row(artist) == {"name": "Anna", "username": "@anna", "slug": "anna"}

    def test_registered_artist_mapping(self):
        row = {
            "name": "Clara",
            "username": "@clara",
            "slug": "clara",
            "telegramId": "777",
            "registeredAt": "2024-03-01T12:00:00+00:00",
        }

        artist = row_to_artist(row)

        assert artist.recipient_id == "777"
        assert artist.registered_at == datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
        assert artist_to_row(artist) == row

    def test_orphan_registered_at_dropped(self):
        artist = row_to_artist(
            {
                "name": "Anna",
                "username": "@anna",
                "slug": "anna",
                "registeredAt": "2024-03-01T12:00:00+00:00",
            }
        )

        assert artist.registered_at is None
        assert "registeredAt" not in artist_to_row(artist)

    def test_numeric_telegram_id(self):
        artist = row_to_artist(
            {
                "name": "Clara",
                "username": "@clara",
                "slug": "clara",
                "telegramId": 777,
                "registeredAt": "2024-03-01T12:00:00+00:00",
            }
        )

        assert artist_to_row(artist)["telegramId"] == "777"

    def test_artist_to_row_is_plain_json(self):
        artist = Artist(name="Anna", username="@anna", slug="anna").register(
            "555", at=datetime(2024, 5, 1, tzinfo=UTC)
        )

        assert artist_to_row(artist)["registeredAt"] == "2024-05-01T00:00:00+00:00"

    def test_unmodelled_keys_round_trip(self):
        row = {"name": "Anna", "username": "@anna", "slug": "anna", "avatar": "a.png"}

        artist = row_to_artist(row)

        assert artist.roster_fields == {"avatar": "a.png"}
        assert artist.register("555").roster_fields == {"avatar": "a.png"}
        assert artist_to_row(artist) == row

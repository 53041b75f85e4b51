"""Reply texts sent by the bot."""

from datetime import datetime

from limbo.domain.artist.model import Artist

GALLERY = "LIMBO"

NO_USERNAME = (
    "❌ You have no username set in Telegram.\n\n"
    "Please set a username in your Telegram settings and try again:\n"
    "Settings -> Username"
)

NOT_REGISTERED = (
    "❌ You are not registered in the system as an artist.\n\n"
    "If you are an artist, make sure your username matches the one on file."
)

PROBE = (
    "🔔 Test notification\n\n"
    "Everything works. You will receive notifications about new inquiries."
)


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return "unknown"
    return value.strftime("%d-%m-%Y %H:%M:%S")


def not_enrolled(username: str) -> str:
    return (
        f"👋 Hello! This bot is only for artists of the {GALLERY} gallery.\n\n"
        "If you are an artist and want to receive notifications, "
        "please contact the gallery administration.\n\n"
        f"Your username: {username}"
    )


def welcome(artist: Artist) -> str:
    return (
        f"🎨 Welcome, {artist.name}!\n\n"
        f"✅ You are registered with the {GALLERY} gallery notification system.\n\n"
        "From now on you will receive notifications about purchase inquiries "
        "for your works.\n\n"
        "Your status: active\n"
        f"Username: {artist.username}\n"
        f"Registered: {format_timestamp(artist.registered_at)}"
    )


def status(artist: Artist) -> str:
    return (
        "📊 REGISTRATION STATUS\n\n"
        f"Name: {artist.name}\n"
        f"Username: {artist.username}\n"
        f"Status: {'✅ active' if artist.is_registered else '❌ inactive'}\n"
        f"ID: {artist.recipient_id or 'not set'}\n"
        f"Slug: {artist.slug}\n"
        f"Registered: {format_timestamp(artist.registered_at)}"
    )


def roster(artists: list[Artist]) -> str:
    lines = ["📋 ARTISTS:", ""]
    for index, artist in enumerate(artists, 1):
        mark = "✅" if artist.is_registered else "❌"
        lines.append(f"{index}. {mark} {artist.name}")
        lines.append(f"   └─ {artist.username}")
        if artist.is_registered:
            lines.append(f"   └─ ID: {artist.recipient_id}")
            lines.append(f"   └─ Registered: {format_timestamp(artist.registered_at)}")
        lines.append("")

    registered = sum(1 for artist in artists if artist.is_registered)
    lines.append(f"📊 Total: {registered}/{len(artists)} registered")
    return "\n".join(lines)

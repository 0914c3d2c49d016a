"""Estimated listening statistics derived from a user's top items.

Spotify does not expose play counts, so minutes are estimated by assuming
each top track was played PLAYS_PER_TOP_TRACK times.
"""

from wrapped_api.spotify.schemas import AlbumStat, ArtistHours
from wrapped_common.spotify.models import SpotifyArtistFull, SpotifyTrack

PLAYS_PER_TOP_TRACK = 15
TOP_ARTISTS_FOR_HOURS = 5
MS_PER_MINUTE = 60_000


def estimate_minutes(tracks: list[SpotifyTrack], plays_each: int = PLAYS_PER_TOP_TRACK) -> int:
    total_ms = sum((track.duration_ms or 0) * plays_each for track in tracks)
    return round(total_ms / MS_PER_MINUTE)


def derive_albums(tracks: list[SpotifyTrack]) -> list[AlbumStat]:
    """Group top tracks by album, most-represented album first.

    Each track adds its own rounded minutes times PLAYS_PER_TOP_TRACK, so an
    album total can differ slightly from estimate_minutes over the same tracks.
    Ties keep first-seen order.
    """
    albums: dict[str, AlbumStat] = {}
    for track in tracks:
        if track.album is None or track.album.id is None:
            continue
        minutes = round((track.duration_ms or 0) / MS_PER_MINUTE) * PLAYS_PER_TOP_TRACK
        stat = albums.get(track.album.id)
        if stat is None:
            albums[track.album.id] = AlbumStat(
                id=track.album.id,
                name=track.album.name,
                artist_name=track.artists[0].name if track.artists else "",
                image_url=track.album.images[0].url if track.album.images else "",
                track_count=1,
                estimated_minutes=minutes,
            )
        else:
            stat.track_count += 1
            stat.estimated_minutes += minutes
    return sorted(albums.values(), key=lambda a: a.track_count, reverse=True)


def artist_hours(
    artists: list[SpotifyArtistFull],
    tracks: list[SpotifyTrack],
    limit: int = TOP_ARTISTS_FOR_HOURS,
) -> list[ArtistHours]:
    """Estimated listening time for the top ``limit`` artists, from tracks crediting them."""
    result: list[ArtistHours] = []
    for artist in artists[:limit]:
        credited = [t for t in tracks if any(a.id == artist.id for a in t.artists)]
        minutes = estimate_minutes(credited)
        result.append(
            ArtistHours(
                artist_id=artist.id,
                artist_name=artist.name,
                image_url=artist.images[0].url if artist.images else None,
                minutes=minutes,
                hours=round(minutes / 60),
            )
        )
    return result

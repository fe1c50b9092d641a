"""
Music Queue - Main Entry Point

A console front end for the music queue: loads the song catalog, then
reads one command per line and prints the resulting state.
"""

import sys
import os
import argparse
import logging

# Add src to path
src_path = os.path.dirname(os.path.abspath(__file__))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from core.event_bus import EventType  # noqa: E402
from models.queue_state import QueueSnapshot  # noqa: E402

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  next            play the next song
  prev            play the previous song
  play <id>       play a queued song now
  remove <id>     remove a song from the queue
  genre <name>    toggle a genre filter
  show            print the current state
  help            show this help
  quit            exit"""


def render(snapshot: QueueSnapshot) -> str:
    """Format a queue snapshot as plain text"""
    if snapshot.is_loading:
        return "Loading music..."
    if snapshot.error:
        return f"Error: {snapshot.error}"

    lines = []
    if snapshot.current is not None:
        song = snapshot.current
        lines.append(f"Now playing: {song.title} - {song.artist} ({song.album}) [{song.genre}]")
    else:
        lines.append("No song playing")

    if snapshot.genres:
        marked = [f"*{g}" if g in snapshot.selected_genres else g for g in snapshot.genres]
        lines.append("Genres: " + ", ".join(marked))
    if snapshot.is_filtered:
        lines.append("Filtering: " + ", ".join(snapshot.selected_genres))

    lines.append(f"Queue ({len(snapshot.queue)} songs):")
    if not snapshot.queue:
        lines.append("  Queue is empty")
    for index, song in enumerate(snapshot.queue, start=1):
        lines.append(f"  {index:2d}. [{song.id}] {song.title} - {song.artist} • {song.album} ({song.genre})")

    if snapshot.history:
        lines.append("Recently played:")
        for song in snapshot.history:
            lines.append(f"  [{song.id}] {song.title} - {song.artist}")

    return "\n".join(lines)


def _parse_song_id(arg: str):
    try:
        return int(arg)
    except ValueError:
        return None


def handle_command(queue_service, line: str) -> bool:
    """
    Apply one console command

    Returns:
        bool: False when the user asked to quit
    """
    parts = line.strip().split(maxsplit=1)
    if not parts:
        return True

    command = parts[0].lower()
    arg = parts[1] if len(parts) > 1 else ""

    if command in ("quit", "exit", "q"):
        return False
    if command == "help":
        print(HELP_TEXT)
        return True

    if command == "next":
        queue_service.advance()
    elif command == "prev":
        queue_service.go_back()
    elif command in ("play", "remove"):
        song_id = _parse_song_id(arg)
        if song_id is None:
            print(f"Usage: {command} <id>")
            return True
        if command == "play":
            queue_service.play_from_queue(song_id)
        else:
            queue_service.remove_from_queue(song_id)
    elif command == "genre":
        if not arg:
            print("Usage: genre <name>")
            return True
        queue_service.toggle_genre(arg)
    elif command != "show":
        print(f"Unknown command: {command} (type 'help')")
        return True

    print(render(queue_service.snapshot()))
    return True


def configure_logging(config, verbose: bool = False) -> None:
    level_name = "DEBUG" if verbose else str(config.get("logging.level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=config.get("logging.format", "%(asctime)s %(levelname)s %(name)s: %(message)s"),
    )


def main(argv=None) -> int:
    """Application entry point"""
    parser = argparse.ArgumentParser(description="Music queue manager")
    parser.add_argument("catalog", nargs="?", help="Song catalog: JSON file path or http(s) URL")
    parser.add_argument("--config", default="config/default_config.yaml", help="Configuration file path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    # Create dependency container (composition root)
    from app.container_factory import AppContainerFactory
    container = AppContainerFactory.create(config_path=args.config, catalog_location=args.catalog)
    configure_logging(container.config, args.verbose)

    queue_service = container.queue_service
    container.event_bus.subscribe(EventType.CATALOG_LOADING, lambda snapshot: print(render(snapshot)))
    try:
        if not queue_service.load_catalog():
            print(render(queue_service.snapshot()))
            return 1

        print(render(queue_service.snapshot()))
        print("Type 'help' for commands.")
        for line in sys.stdin:
            if not handle_command(queue_service, line):
                break
    finally:
        container.cleanup()

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""CLI entry point for Moodtunes."""

import argparse
import asyncio
import json
import logging
import sys

from service import MoodError, create_service


async def run(args: argparse.Namespace) -> int:
    async with create_service() as service:
        try:
            if args.command == "songs":
                data = [s.to_dict() for s in await service.songs_for_mood(args.mood, args.count)]
            elif args.command == "podcasts":
                data = [p.to_dict() for p in await service.podcasts_for_mood(args.mood)]
            else:
                resolution = await service.resolve_music_url(
                    query=args.query, youtube_search_url=args.url
                )
                data = resolution.to_dict()
        except MoodError as e:
            print(f"Request rejected: {e}", file=sys.stderr)
            return 2
    print(json.dumps(data, ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Moodtunes - songs and podcasts for a mood")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    songs = sub.add_parser("songs", help="Suggest songs for a mood")
    songs.add_argument("mood")
    songs.add_argument("--count", type=int, default=30, help="Number of songs (1-50)")

    podcasts = sub.add_parser("podcasts", help="Suggest podcasts for a mood")
    podcasts.add_argument("mood")

    resolve = sub.add_parser("resolve", help="Resolve a query to YouTube Music URLs")
    resolve.add_argument("query", nargs="?", default="")
    resolve.add_argument("--url", default="", help="Precomputed YouTube search URL")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()

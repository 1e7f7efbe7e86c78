#!/usr/bin/env python3
"""
YouTube CLI - Search, list videos, channels, and playlists

Usage:
    google-youtube <command> [id] [--flag=value]

Commands:
    auth                    Authenticate with Google (per-project token)

    channels                List your YouTube channels

    channel <channelId>     Get channel details

    videos                  List your videos
      --channel=ID          Channel ID (default: your channel)
      --max=N               Max results (default: 10)

    video <videoId>         Get video details

    playlists               List your playlists
      --max=N               Max results (default: 20)

    playlist <playlistId>   Get playlist items
      --max=N               Max results (default: 50)

    search                  Search YouTube
      --query=QUERY         Search query (required)
      --max=N               Max results (default: 10)
      --type=TYPE           Filter by: video, channel, playlist

    comments <videoId>      Get video comments
      --max=N               Max results (default: 20)

Examples:
    google-youtube channels
    google-youtube videos --max=20
    google-youtube video dQw4w9WgXcQ
    google-youtube playlist PL...
    google-youtube search --query="python tutorial" --type=video --max=5
    google-youtube comments dQw4w9WgXcQ

Credentials: ~/.config/google-skill/credentials.json
Token:       .claude/google-skill.local.json (per-project)
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cli.common import build_parser, require, run
from google_services.youtube_service import YouTubeService, SEARCH_TYPES

TOOL = "google-youtube"


def create_parser():
    parser, subparsers = build_parser(TOOL, "Search, list videos, channels, and playlists")

    subparsers.add_parser("channels", help="List your YouTube channels")

    channel = subparsers.add_parser("channel", help="Get channel details")
    channel.add_argument("id", nargs="?")

    videos = subparsers.add_parser("videos", help="List your videos")
    videos.add_argument("--channel", type=str)
    videos.add_argument("--max", type=int, default=10)

    video = subparsers.add_parser("video", help="Get video details")
    video.add_argument("id", nargs="?")

    playlists = subparsers.add_parser("playlists", help="List your playlists")
    playlists.add_argument("--max", type=int, default=20)

    playlist = subparsers.add_parser("playlist", help="Get playlist items")
    playlist.add_argument("id", nargs="?")
    playlist.add_argument("--max", type=int, default=50)

    search = subparsers.add_parser("search", help="Search YouTube")
    search.add_argument("--query", type=str)
    search.add_argument("--max", type=int, default=10)
    search.add_argument("--type", choices=SEARCH_TYPES)

    comments = subparsers.add_parser("comments", help="Get video comments")
    comments.add_argument("id", nargs="?")
    comments.add_argument("--max", type=int, default=20)

    return parser


def handle_channels(youtube: YouTubeService, args):
    channels = youtube.list_my_channels()
    return {"channels": channels, "count": len(channels)}


def handle_channel(youtube: YouTubeService, args):
    channel_id = require(args.id, f"Channel ID required. Usage: {TOOL} channel <channelId>")
    return youtube.get_channel(channel_id)


def handle_videos(youtube: YouTubeService, args):
    videos = youtube.list_videos(max_results=args.max, channel_id=args.channel)
    return {"videos": videos, "count": len(videos)}


def handle_video(youtube: YouTubeService, args):
    video_id = require(args.id, f"Video ID required. Usage: {TOOL} video <videoId>")
    return youtube.get_video(video_id)


def handle_playlists(youtube: YouTubeService, args):
    playlists = youtube.list_my_playlists(max_results=args.max)
    return {"playlists": playlists, "count": len(playlists)}


def handle_playlist(youtube: YouTubeService, args):
    playlist_id = require(args.id, f"Playlist ID required. Usage: {TOOL} playlist <playlistId>")
    items = youtube.get_playlist_items(playlist_id, max_results=args.max)
    return {"items": items, "count": len(items)}


def handle_search(youtube: YouTubeService, args):
    query = require(args.query, f"Query required. Usage: {TOOL} search --query=QUERY")
    results = youtube.search(query, max_results=args.max, result_type=args.type)
    return {"results": results, "count": len(results)}


def handle_comments(youtube: YouTubeService, args):
    video_id = require(args.id, f"Video ID required. Usage: {TOOL} comments <videoId>")
    comments = youtube.get_video_comments(video_id, max_results=args.max)
    return {"comments": comments, "count": len(comments)}


HANDLERS = {
    "channels": handle_channels,
    "channel": handle_channel,
    "videos": handle_videos,
    "video": handle_video,
    "playlists": handle_playlists,
    "playlist": handle_playlist,
    "search": handle_search,
    "comments": handle_comments,
}


def main(argv=None):
    """Main entry point."""
    run(TOOL, __doc__, create_parser(), HANDLERS, YouTubeService, argv)


if __name__ == "__main__":
    main()

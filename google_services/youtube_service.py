#!/usr/bin/env python3
"""
YouTube Service - Channels, videos, playlists, search and comments.

Wraps the YouTube Data API v3 and reshapes its resources into flat
records with camelCase keys. Statistics arrive as strings and are
converted to integers.
"""

import logging
from typing import Optional, List, Dict, Any

from google_services.auth import GoogleAuth
from google_services.mapping import compact, to_int, thumbnail_url

logger = logging.getLogger(__name__)

SEARCH_TYPES = ("video", "channel", "playlist")


def channel_record(channel: Dict[str, Any]) -> Dict[str, Any]:
    snippet = channel.get("snippet") or {}
    statistics = channel.get("statistics") or {}
    return compact({
        "id": channel.get("id"),
        "title": snippet.get("title", ""),
        "description": snippet.get("description", ""),
        "customUrl": snippet.get("customUrl"),
        "subscriberCount": to_int(statistics.get("subscriberCount")),
        "videoCount": to_int(statistics.get("videoCount")),
        "viewCount": to_int(statistics.get("viewCount")),
        "thumbnailUrl": thumbnail_url(snippet, "default"),
    })


def video_record(video: Dict[str, Any]) -> Dict[str, Any]:
    snippet = video.get("snippet") or {}
    statistics = video.get("statistics") or {}
    content = video.get("contentDetails") or {}
    return compact({
        "id": video.get("id"),
        "title": snippet.get("title", ""),
        "description": snippet.get("description", ""),
        "publishedAt": snippet.get("publishedAt", ""),
        "channelId": snippet.get("channelId", ""),
        "channelTitle": snippet.get("channelTitle", ""),
        "thumbnailUrl": thumbnail_url(snippet, "medium"),
        "viewCount": to_int(statistics.get("viewCount")),
        "likeCount": to_int(statistics.get("likeCount")),
        "commentCount": to_int(statistics.get("commentCount")),
        "duration": content.get("duration"),
    })


class YouTubeService:
    """
    YouTube Data API service wrapper.

    Every call returns a single page of results (maxResults).
    """

    def __init__(self, auth: Optional[GoogleAuth] = None):
        """
        Initialize YouTube service.

        Args:
            auth: GoogleAuth instance (creates one if not provided)
        """
        self._auth = auth or GoogleAuth()
        self._service = None

    @property
    def service(self):
        """Get the YouTube API service (lazy load)."""
        if self._service is None:
            self._service = self._auth.get_service("youtube")
        return self._service

    # -------------------------------------------------------------------------
    # Channels
    # -------------------------------------------------------------------------

    def list_my_channels(self) -> List[Dict[str, Any]]:
        """List channels owned by the authenticated account."""
        response = self.service.channels().list(
            part="snippet,statistics,contentDetails",
            mine=True,
        ).execute()
        return [channel_record(c) for c in response.get("items", [])]

    def get_channel(self, channel_id: str) -> Dict[str, Any]:
        """
        Get a channel by ID.

        Raises:
            LookupError: If the channel does not exist
        """
        response = self.service.channels().list(
            part="snippet,statistics,contentDetails",
            id=channel_id,
        ).execute()

        items = response.get("items", [])
        if not items:
            raise LookupError(f"Channel not found: {channel_id}")
        return channel_record(items[0])

    # -------------------------------------------------------------------------
    # Videos
    # -------------------------------------------------------------------------

    def list_videos(
        self,
        max_results: int = 10,
        channel_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        List the most recent videos of a channel.

        Without a channel ID the caller's first channel is used. Video IDs
        come from a date-ordered search; details come from videos.list.

        Args:
            max_results: Maximum number of videos
            channel_id: Channel to list (default: your channel)

        Returns:
            List of video records, newest first
        """
        target_channel_id = channel_id
        if not target_channel_id:
            channels = self.list_my_channels()
            if not channels:
                raise LookupError("No YouTube channel found for this account")
            target_channel_id = channels[0]["id"]
            logger.debug("Resolved own channel %s", target_channel_id)

        search = self.service.search().list(
            part="snippet",
            channelId=target_channel_id,
            type="video",
            order="date",
            maxResults=max_results,
        ).execute()

        video_ids = [
            item["id"]["videoId"]
            for item in search.get("items", [])
            if (item.get("id") or {}).get("videoId")
        ]
        if not video_ids:
            return []

        response = self.service.videos().list(
            part="snippet,statistics,contentDetails",
            id=",".join(video_ids),
        ).execute()
        return [video_record(v) for v in response.get("items", [])]

    def get_video(self, video_id: str) -> Dict[str, Any]:
        """
        Get video details.

        Raises:
            LookupError: If the video does not exist
        """
        response = self.service.videos().list(
            part="snippet,statistics,contentDetails",
            id=video_id,
        ).execute()

        items = response.get("items", [])
        if not items:
            raise LookupError(f"Video not found: {video_id}")
        return video_record(items[0])

    # -------------------------------------------------------------------------
    # Playlists
    # -------------------------------------------------------------------------

    def list_my_playlists(self, max_results: int = 20) -> List[Dict[str, Any]]:
        """List playlists owned by the authenticated account."""
        response = self.service.playlists().list(
            part="snippet,contentDetails",
            mine=True,
            maxResults=max_results,
        ).execute()

        playlists = []
        for playlist in response.get("items", []):
            snippet = playlist.get("snippet") or {}
            content = playlist.get("contentDetails") or {}
            playlists.append(compact({
                "id": playlist.get("id"),
                "title": snippet.get("title", ""),
                "description": snippet.get("description", ""),
                "itemCount": content.get("itemCount") or 0,
                "thumbnailUrl": thumbnail_url(snippet, "medium"),
                "publishedAt": snippet.get("publishedAt", ""),
            }))
        return playlists

    def get_playlist_items(
        self,
        playlist_id: str,
        max_results: int = 50,
    ) -> List[Dict[str, Any]]:
        """List the videos in a playlist."""
        response = self.service.playlistItems().list(
            part="snippet,contentDetails",
            playlistId=playlist_id,
            maxResults=max_results,
        ).execute()

        items = []
        for item in response.get("items", []):
            snippet = item.get("snippet") or {}
            content = item.get("contentDetails") or {}
            items.append(compact({
                "id": item.get("id"),
                "videoId": content.get("videoId", ""),
                "title": snippet.get("title", ""),
                "description": snippet.get("description", ""),
                "thumbnailUrl": thumbnail_url(snippet, "medium"),
                "position": snippet.get("position") or 0,
                "channelTitle": snippet.get("channelTitle", ""),
            }))
        return items

    # -------------------------------------------------------------------------
    # Search and comments
    # -------------------------------------------------------------------------

    def search(
        self,
        query: str,
        max_results: int = 10,
        result_type: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Search YouTube by relevance.

        Args:
            query: Search terms
            max_results: Maximum number of results
            result_type: Restrict to 'video', 'channel' or 'playlist'

        Returns:
            List of search result records
        """
        params = {
            "part": "snippet",
            "q": query,
            "maxResults": max_results,
            "order": "relevance",
        }
        if result_type:
            params["type"] = result_type

        response = self.service.search().list(**params).execute()

        results = []
        for item in response.get("items", []):
            item_id = item.get("id") or {}
            snippet = item.get("snippet") or {}

            result_id, kind = "", "video"
            if item_id.get("videoId"):
                result_id, kind = item_id["videoId"], "video"
            elif item_id.get("channelId"):
                result_id, kind = item_id["channelId"], "channel"
            elif item_id.get("playlistId"):
                result_id, kind = item_id["playlistId"], "playlist"

            results.append(compact({
                "id": result_id,
                "kind": kind,
                "title": snippet.get("title", ""),
                "description": snippet.get("description", ""),
                "channelTitle": snippet.get("channelTitle", ""),
                "publishedAt": snippet.get("publishedAt", ""),
                "thumbnailUrl": thumbnail_url(snippet, "medium"),
            }))
        return results

    def get_video_comments(
        self,
        video_id: str,
        max_results: int = 20,
    ) -> List[Dict[str, Any]]:
        """List top-level comment threads on a video."""
        response = self.service.commentThreads().list(
            part="snippet",
            videoId=video_id,
            maxResults=max_results,
            order="relevance",
        ).execute()

        comments = []
        for thread in response.get("items", []):
            comment = ((thread.get("snippet") or {}).get("topLevelComment") or {}).get("snippet") or {}
            comments.append(compact({
                "id": thread.get("id"),
                "authorDisplayName": comment.get("authorDisplayName", ""),
                "authorChannelId": (comment.get("authorChannelId") or {}).get("value"),
                "textDisplay": comment.get("textDisplay", ""),
                "textOriginal": comment.get("textOriginal", ""),
                "likeCount": comment.get("likeCount") or 0,
                "publishedAt": comment.get("publishedAt", ""),
                "updatedAt": comment.get("updatedAt", ""),
            }))
        return comments

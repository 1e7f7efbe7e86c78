"""Tests for the YouTube Data API wrapper."""

import pytest

from google_services.youtube_service import YouTubeService, channel_record, video_record


@pytest.fixture
def youtube(fake_auth):
    return YouTubeService(fake_auth)


@pytest.fixture
def api(youtube):
    return youtube.service


def _video(video_id, views="10"):
    return {
        "id": video_id,
        "snippet": {
            "title": f"Video {video_id}",
            "description": "",
            "publishedAt": "2026-01-10T12:00:00Z",
            "channelId": "UC1",
            "channelTitle": "Mine",
            "thumbnails": {"medium": {"url": f"https://i.ytimg.com/{video_id}.jpg"}},
        },
        "statistics": {"viewCount": views, "likeCount": "2"},
        "contentDetails": {"duration": "PT3M2S"},
    }


class TestRecords:

    def test_channel_statistics_are_integers(self):
        record = channel_record({
            "id": "UC1",
            "snippet": {"title": "Mine", "description": "d", "customUrl": "@mine",
                        "thumbnails": {"default": {"url": "https://t/d.jpg"}}},
            "statistics": {"subscriberCount": "1200", "videoCount": "34", "viewCount": "99999"},
        })

        assert record == {
            "id": "UC1",
            "title": "Mine",
            "description": "d",
            "customUrl": "@mine",
            "subscriberCount": 1200,
            "videoCount": 34,
            "viewCount": 99999,
            "thumbnailUrl": "https://t/d.jpg",
        }

    def test_hidden_statistics_are_omitted(self):
        record = video_record({"id": "v1", "snippet": {"title": "t"}, "statistics": {"viewCount": "5"}})

        assert record["viewCount"] == 5
        assert "likeCount" not in record
        assert "commentCount" not in record
        assert "duration" not in record
        assert "thumbnailUrl" not in record


class TestChannels:

    def test_list_my_channels(self, youtube, api):
        api.channels.return_value.list.return_value.execute.return_value = {
            "items": [{"id": "UC1", "snippet": {"title": "Mine"}, "statistics": {}}]
        }

        channels = youtube.list_my_channels()

        assert [c["id"] for c in channels] == ["UC1"]
        api.channels.return_value.list.assert_called_with(
            part="snippet,statistics,contentDetails", mine=True
        )

    def test_get_channel_not_found(self, youtube, api):
        api.channels.return_value.list.return_value.execute.return_value = {"items": []}

        with pytest.raises(LookupError, match="Channel not found: UCx"):
            youtube.get_channel("UCx")


class TestVideos:

    def test_list_videos_for_own_channel(self, youtube, api):
        api.channels.return_value.list.return_value.execute.return_value = {
            "items": [{"id": "UC1", "snippet": {"title": "Mine"}}]
        }
        api.search.return_value.list.return_value.execute.return_value = {
            "items": [{"id": {"videoId": "v1"}}, {"id": {"videoId": "v2"}}]
        }
        api.videos.return_value.list.return_value.execute.return_value = {
            "items": [_video("v1", "100"), _video("v2")]
        }

        videos = youtube.list_videos(max_results=2)

        api.search.return_value.list.assert_called_with(
            part="snippet", channelId="UC1", type="video", order="date", maxResults=2
        )
        api.videos.return_value.list.assert_called_with(
            part="snippet,statistics,contentDetails", id="v1,v2"
        )
        assert videos[0]["viewCount"] == 100
        assert videos[0]["duration"] == "PT3M2S"

    def test_list_videos_for_given_channel_skips_lookup(self, youtube, api):
        api.search.return_value.list.return_value.execute.return_value = {"items": []}

        assert youtube.list_videos(channel_id="UC9") == []
        assert not api.channels.called
        assert not api.videos.called

    def test_list_videos_without_channel(self, youtube, api):
        api.channels.return_value.list.return_value.execute.return_value = {"items": []}

        with pytest.raises(LookupError, match="No YouTube channel"):
            youtube.list_videos()

    def test_get_video_not_found(self, youtube, api):
        api.videos.return_value.list.return_value.execute.return_value = {}

        with pytest.raises(LookupError, match="Video not found: nope"):
            youtube.get_video("nope")


class TestPlaylists:

    def test_list_my_playlists(self, youtube, api):
        api.playlists.return_value.list.return_value.execute.return_value = {
            "items": [{"id": "PL1", "snippet": {"title": "Faves"}, "contentDetails": {"itemCount": 7}}]
        }

        playlists = youtube.list_my_playlists(max_results=5)

        assert playlists[0]["itemCount"] == 7
        api.playlists.return_value.list.assert_called_with(
            part="snippet,contentDetails", mine=True, maxResults=5
        )

    def test_playlist_items(self, youtube, api):
        api.playlistItems.return_value.list.return_value.execute.return_value = {
            "items": [{
                "id": "item1",
                "snippet": {"title": "First", "position": 0, "channelTitle": "Mine"},
                "contentDetails": {"videoId": "v1"},
            }]
        }

        items = youtube.get_playlist_items("PL1")

        assert items == [{
            "id": "item1",
            "videoId": "v1",
            "title": "First",
            "description": "",
            "position": 0,
            "channelTitle": "Mine",
        }]


class TestSearchAndComments:

    def test_search_kinds(self, youtube, api):
        api.search.return_value.list.return_value.execute.return_value = {
            "items": [
                {"id": {"videoId": "v1"}, "snippet": {"title": "a"}},
                {"id": {"channelId": "UC2"}, "snippet": {"title": "b"}},
                {"id": {"playlistId": "PL3"}, "snippet": {"title": "c"}},
            ]
        }

        results = youtube.search("python", max_results=3)

        assert [(r["id"], r["kind"]) for r in results] == [
            ("v1", "video"), ("UC2", "channel"), ("PL3", "playlist")
        ]
        params = api.search.return_value.list.call_args.kwargs
        assert params["order"] == "relevance"
        assert "type" not in params

    def test_search_type_filter(self, youtube, api):
        api.search.return_value.list.return_value.execute.return_value = {"items": []}

        youtube.search("python", result_type="channel")

        assert api.search.return_value.list.call_args.kwargs["type"] == "channel"

    def test_comments(self, youtube, api):
        api.commentThreads.return_value.list.return_value.execute.return_value = {
            "items": [{
                "id": "c1",
                "snippet": {"topLevelComment": {"snippet": {
                    "authorDisplayName": "Ann",
                    "authorChannelId": {"value": "UCann"},
                    "textDisplay": "Nice",
                    "textOriginal": "Nice",
                    "likeCount": 3,
                    "publishedAt": "2026-01-01T00:00:00Z",
                    "updatedAt": "2026-01-01T00:00:00Z",
                }}},
            }]
        }

        comments = youtube.get_video_comments("v1", max_results=1)

        assert comments[0]["authorChannelId"] == "UCann"
        assert comments[0]["likeCount"] == 3

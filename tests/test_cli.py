"""Tests for the command line tools: dispatch, JSON envelope and exit codes."""

import json
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest
from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from cli import docs, gcalendar, gmail, sheets, youtube
import config
from cli.common import describe_error, separate_dash_ids, split_list


@pytest.fixture
def google_auth():
    with patch("cli.common.GoogleAuth") as auth_cls:
        yield auth_cls.return_value


def invoke(module, service_name, argv, capsys, returns=None):
    """
    Run a tool's main() with its service class mocked.

    returns maps service method names to their (JSON serializable) results.

    Returns:
        (exit code, parsed envelope, service mock)
    """
    service = MagicMock()
    for method, value in (returns or {}).items():
        getattr(service, method).return_value = value
    with patch.object(module, service_name, return_value=service):
        try:
            module.main(argv)
            code = 0
        except SystemExit as e:
            code = e.code
    out = capsys.readouterr().out
    return code, json.loads(out), service


class TestEnvelope:

    @pytest.mark.parametrize("argv", [[], ["--help"], ["-h"], ["help"]])
    def test_help_exits_zero(self, argv, capsys):
        with pytest.raises(SystemExit) as exc_info:
            youtube.main(argv)

        assert exc_info.value.code == 0
        assert "google-youtube <command>" in capsys.readouterr().out

    def test_unknown_command(self, google_auth, capsys):
        code, envelope, _ = invoke(youtube, "YouTubeService", ["dance"], capsys)

        assert code == 1
        assert envelope == {
            "success": False,
            "error": "Unknown command: dance. Run with --help for usage.",
        }

    def test_success_envelope(self, google_auth, capsys):
        service = MagicMock()
        service.list_my_channels.return_value = [{"id": "UC1", "title": "Mine"}]

        with patch.object(youtube, "YouTubeService", return_value=service):
            youtube.main(["channels"])

        envelope = json.loads(capsys.readouterr().out)
        assert envelope == {
            "success": True,
            "data": {"channels": [{"id": "UC1", "title": "Mine"}], "count": 1},
        }

    def test_unknown_flag_is_an_error(self, google_auth, capsys):
        code, envelope, _ = invoke(youtube, "YouTubeService", ["channels", "--bogus=1"], capsys)

        assert code == 1
        assert envelope["success"] is False
        assert "--bogus" in envelope["error"]

    def test_bad_number(self, google_auth, capsys):
        code, envelope, _ = invoke(youtube, "YouTubeService", ["videos", "--max=lots"], capsys)

        assert code == 1
        assert "invalid int value" in envelope["error"]

    def test_service_exception_becomes_failure(self, google_auth, capsys):
        service = MagicMock()
        service.get_video.side_effect = LookupError("Video not found: x")

        with patch.object(youtube, "YouTubeService", return_value=service):
            with pytest.raises(SystemExit) as exc_info:
                youtube.main(["video", "x"])

        assert exc_info.value.code == 1
        assert json.loads(capsys.readouterr().out) == {"success": False, "error": "Video not found: x"}

    def test_auth_command(self, google_auth, capsys):
        google_auth.authorize.return_value = Path("/work/.claude/google-skill.local.json")
        google_auth.scopes = ["scope-a"]

        code, envelope, service = invoke(gmail, "GmailService", ["auth"], capsys)

        assert code == 0
        assert envelope["data"] == {
            "tokenPath": "/work/.claude/google-skill.local.json",
            "scopes": ["scope-a"],
        }
        assert not service.method_calls

    def test_tool_name_passed_to_auth(self, capsys):
        with patch("cli.common.GoogleAuth") as auth_cls:
            invoke(sheets, "SheetsService", ["list"], capsys, returns={"list_spreadsheets": []})

        auth_cls.assert_called_once_with(tool_name="google-sheets")

    @pytest.mark.parametrize("argv", [["search", "--help"], ["video", "abc", "-h"]])
    def test_command_help_prints_usage(self, argv, capsys):
        with pytest.raises(SystemExit) as exc_info:
            youtube.main(argv)

        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert "google-youtube <command>" in out
        assert not out.startswith("usage:")

    @pytest.mark.parametrize("name", ["GOOGLE_SKILL_OAUTH_PORT", "GOOGLE_SKILL_AUTH_TIMEOUT"])
    def test_bad_environment_value(self, google_auth, monkeypatch, capsys, name):
        monkeypatch.setenv(name, "abc")
        monkeypatch.setattr(config, "_config", None)

        code, envelope, service = invoke(youtube, "YouTubeService", ["video", "x"], capsys)

        assert code == 1
        assert envelope["success"] is False
        assert "invalid literal for int()" in envelope["error"]
        assert not service.get_video.called


class TestDescribeError:

    def test_http_error_uses_google_message(self):
        error = HttpError(
            Mock(status=404, reason="Not Found"),
            b'{"error": {"code": 404, "message": "Requested entity was not found."}}',
        )
        assert describe_error(error) == "Requested entity was not found."

    def test_http_error_without_json_body(self):
        error = HttpError(Mock(status=502, reason="Bad Gateway"), b"<html>oops</html>")
        assert describe_error(error) == "Bad Gateway"

    def test_refresh_error_suggests_auth(self):
        message = describe_error(RefreshError("invalid_grant: Token has been expired or revoked."))
        assert message.startswith("invalid_grant")
        assert "run the auth command again" in message


def test_split_list():
    assert split_list(" a@x.com, b@x.com ,,") == ["a@x.com", "b@x.com"]
    assert split_list(None) == []


class TestSeparateDashIds:

    def test_dash_id_moves_behind_separator(self):
        assert separate_dash_ids(["comments", "-FlxM_0S2lA", "--max=5"]) == [
            "comments", "--max=5", "--", "-FlxM_0S2lA"
        ]

    def test_untouched_without_dash_ids(self):
        assert separate_dash_ids(["video", "abc", "--max=5"]) == ["video", "abc", "--max=5"]

    def test_existing_separator_kept(self):
        assert separate_dash_ids(["video", "--", "-abc"]) == ["video", "--", "-abc"]


class TestYouTube:

    def test_missing_video_id(self, google_auth, capsys):
        code, envelope, _ = invoke(youtube, "YouTubeService", ["video"], capsys)

        assert code == 1
        assert envelope["error"] == "Video ID required. Usage: google-youtube video <videoId>"

    def test_search(self, google_auth, capsys):
        code, envelope, service = invoke(
            youtube, "YouTubeService", ["search", "--query=python tutorial", "--type=video", "--max=5"], capsys,
            returns={"search": [{"id": "v1", "kind": "video"}]},
        )

        assert code == 0
        service.search.assert_called_once_with("python tutorial", max_results=5, result_type="video")
        assert envelope["data"] == {"results": [{"id": "v1", "kind": "video"}], "count": 1}

    def test_search_requires_query(self, google_auth, capsys):
        code, envelope, _ = invoke(youtube, "YouTubeService", ["search"], capsys)

        assert code == 1
        assert envelope["error"].startswith("Query required.")

    def test_playlist_defaults(self, google_auth, capsys):
        _, _, service = invoke(
            youtube, "YouTubeService", ["playlist", "PL1"], capsys, returns={"get_playlist_items": []}
        )
        service.get_playlist_items.assert_called_once_with("PL1", max_results=50)

    def test_video_id_starting_with_dash(self, google_auth, capsys):
        code, envelope, service = invoke(
            youtube, "YouTubeService", ["video", "-FlxM_0S2lA"], capsys,
            returns={"get_video": {"id": "-FlxM_0S2lA", "title": "t"}},
        )

        assert code == 0
        service.get_video.assert_called_once_with("-FlxM_0S2lA")
        assert envelope["data"]["id"] == "-FlxM_0S2lA"

    def test_dash_id_before_flag(self, google_auth, capsys):
        code, _, service = invoke(
            youtube, "YouTubeService", ["comments", "-FlxM_0S2lA", "--max=5"], capsys,
            returns={"get_video_comments": []},
        )

        assert code == 0
        service.get_video_comments.assert_called_once_with("-FlxM_0S2lA", max_results=5)


class TestGmail:

    def test_list_defaults(self, google_auth, capsys):
        _, _, service = invoke(gmail, "GmailService", ["list"], capsys, returns={"list_messages": []})
        service.list_messages.assert_called_once_with(max_results=20, label_id="INBOX")

    def test_send(self, google_auth, capsys):
        code, _, service = invoke(
            gmail, "GmailService",
            ["send", "--to=a@example.com,b@example.com", "--subject=Hi", "--body=Hello", "--cc=c@example.com"],
            capsys,
            returns={"send_message": {"id": "s1", "threadId": "t1", "labels": ["SENT"]}},
        )

        assert code == 0
        service.send_message.assert_called_once_with(
            to=["a@example.com", "b@example.com"],
            subject="Hi",
            body="Hello",
            cc=["c@example.com"],
            bcc=None,
        )

    def test_send_requires_subject(self, google_auth, capsys):
        code, envelope, service = invoke(gmail, "GmailService", ["send", "--to=a@example.com", "--body=x"], capsys)

        assert code == 1
        assert envelope["error"].startswith("Subject required.")
        assert not service.send_message.called

    def test_modify_needs_labels(self, google_auth, capsys):
        code, envelope, _ = invoke(gmail, "GmailService", ["modify", "m1"], capsys)

        assert code == 1
        assert envelope["error"].startswith("Labels to add or remove required.")

    def test_mark_read(self, google_auth, capsys):
        _, _, service = invoke(
            gmail, "GmailService", ["modify", "m1", "--remove=UNREAD"], capsys,
            returns={"modify_labels": {"id": "m1", "labels": ["INBOX"]}},
        )
        service.modify_labels.assert_called_once_with("m1", add=[], remove=["UNREAD"])


class TestCalendar:

    def test_events_defaults(self, google_auth, capsys):
        _, _, service = invoke(gcalendar, "CalendarService", ["events"], capsys, returns={"list_events": []})
        service.list_events.assert_called_once_with(calendar_id="primary", days=7, max_results=50, query=None)

    def test_create(self, google_auth, capsys):
        code, _, service = invoke(
            gcalendar, "CalendarService",
            ["create", "--summary=Standup", "--start=2026-01-12T09:00:00", "--end=2026-01-12T09:15:00",
             "--attendees=a@example.com, b@example.com"],
            capsys,
            returns={"create_event": {"id": "e1", "summary": "Standup"}},
        )

        assert code == 0
        kwargs = service.create_event.call_args.kwargs
        assert kwargs["summary"] == "Standup"
        assert kwargs["attendees"] == ["a@example.com", "b@example.com"]
        assert kwargs["calendar_id"] == "primary"

    def test_create_requires_end(self, google_auth, capsys):
        code, envelope, _ = invoke(
            gcalendar, "CalendarService", ["create", "--summary=x", "--start=2026-01-12"], capsys
        )

        assert code == 1
        assert envelope["error"].startswith("End time required.")


class TestSheets:

    def test_write_parses_values(self, google_auth, capsys):
        _, _, service = invoke(
            sheets, "SheetsService", ["write", "s1", "--range=Sheet1!A1", '--values=[["a", 1]]', "--raw"], capsys,
            returns={"write_range": {"updatedCells": 2}},
        )
        service.write_range.assert_called_once_with("s1", "Sheet1!A1", [["a", 1]], raw=True)

    def test_append_rejects_bad_values(self, google_auth, capsys):
        code, envelope, service = invoke(
            sheets, "SheetsService", ["append", "s1", "--range=Sheet1", "--values=[1, 2]"], capsys
        )

        assert code == 1
        assert envelope["error"] == "Values must be a JSON array of rows"
        assert not service.append_rows.called

    def test_read_requires_range(self, google_auth, capsys):
        code, envelope, _ = invoke(sheets, "SheetsService", ["read", "s1"], capsys)

        assert code == 1
        assert envelope["error"].startswith("Range required.")


class TestDocs:

    def test_replace_with_empty_string(self, google_auth, capsys):
        _, _, service = invoke(
            docs, "DocsService", ["replace", "d1", "--find=DRAFT", "--replace=", "--match-case"], capsys,
            returns={"replace_text": {"id": "d1", "occurrencesChanged": 1}},
        )
        service.replace_text.assert_called_once_with("d1", "DRAFT", "", match_case=True)

    def test_replace_requires_replacement(self, google_auth, capsys):
        code, envelope, _ = invoke(docs, "DocsService", ["replace", "d1", "--find=DRAFT"], capsys)

        assert code == 1
        assert envelope["error"].startswith("Replacement text required.")

    def test_create(self, google_auth, capsys):
        _, _, service = invoke(
            docs, "DocsService", ["create", "--title=Notes"], capsys, returns={"create_document": {"id": "n1"}}
        )
        service.create_document.assert_called_once_with("Notes", content=None)

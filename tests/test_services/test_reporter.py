"""
Tests for the reporter.
"""

import pytest

from hosting_deploy.models.check import CheckDetails


class TestMarkdown:
    """Tests for summary and comment formatting."""

    def test_single_url_is_one_link(self):
        from hosting_deploy.services.reporter import prepare_url_markdown_list

        markdown = prepare_url_markdown_list(["https://a.web.app"], "/docs")

        assert markdown == "[https://a.web.app](https://a.web.app/docs)"

    def test_many_urls_are_a_list(self):
        from hosting_deploy.services.reporter import prepare_url_markdown_list

        urls = ["https://a.web.app", "https://b.web.app", "https://c.web.app"]
        markdown = prepare_url_markdown_list(urls, "/x")

        lines = markdown.splitlines()
        assert len(lines) == 3
        assert lines[1] == "- [https://b.web.app](https://b.web.app/x)"
        assert all(line.startswith("- [") for line in lines)

    def test_production_summary(self):
        from hosting_deploy.services.reporter import production_summary, production_url

        assert production_url("my-project") == "https://my-project.web.app/"
        assert production_summary("my-project") == "[my-project.web.app](https://my-project.web.app/)"

    def test_format_expire_time_with_nanoseconds(self):
        from hosting_deploy.services.reporter import format_expire_time

        assert format_expire_time("2026-10-26T12:00:00.123456789Z") == "Mon, 26 Oct 2026 12:00:00 GMT"

    def test_format_expire_time_with_offset(self):
        from hosting_deploy.services.reporter import format_expire_time

        assert format_expire_time("2026-10-26T14:30:00+02:00") == "Mon, 26 Oct 2026 12:30:00 GMT"

    def test_format_expire_time_unparseable(self):
        from hosting_deploy.services.reporter import format_expire_time

        assert format_expire_time("soon") == "soon"

    def test_preview_comment(self):
        from hosting_deploy.services.reporter import build_preview_comment

        body = build_preview_comment("[u](u)", "abc1234", "2026-10-26T12:00:00Z")

        assert body.startswith("Visit the preview URL for this PR (updated for commit abc1234):")
        assert "[u](u)" in body
        assert body.endswith("<sub>(expires Mon, 26 Oct 2026 12:00:00 GMT)</sub>")


class TestCheck:
    """Tests for the check run finish callback."""

    @pytest.mark.asyncio
    async def test_create_check_and_finish(self, mock_github):
        from hosting_deploy.services.reporter import CHECK_NAME, create_check

        finish = await create_check(mock_github, "abc1234")
        mock_github.create_check_run.assert_awaited_once_with("abc1234", CHECK_NAME)

        await finish(CheckDetails(conclusion="success", title="t", summary="s", details_url="https://u"))

        check_run_id, fields = mock_github.update_check_run.await_args.args
        assert check_run_id == 555
        assert fields["status"] == "completed"
        assert fields["conclusion"] == "success"
        assert fields["details_url"] == "https://u"
        assert fields["output"] == {"title": "t", "summary": "s"}
        assert fields["completed_at"].endswith("Z")

    @pytest.mark.asyncio
    async def test_log_finish(self, caplog):
        from hosting_deploy.services.reporter import log_finish

        with caplog.at_level("INFO"):
            await log_finish(CheckDetails(conclusion="failure", title="Deploy preview failed", summary="Error: x"))

        assert "Deploy preview failed" in caplog.text


class TestPostOrUpdateComment:
    """Tests for post_or_update_comment."""

    @pytest.mark.asyncio
    async def test_creates_when_missing(self, mock_github):
        from hosting_deploy.services.reporter import COMMENT_MARKER, post_or_update_comment

        mock_github.list_comments.return_value = [{"id": 1, "body": "LGTM"}]

        await post_or_update_comment(mock_github, 42, "preview body")

        mock_github.create_comment.assert_awaited_once()
        pr_number, body = mock_github.create_comment.await_args.args
        assert pr_number == 42
        assert body.startswith("preview body")
        assert COMMENT_MARKER in body
        mock_github.update_comment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_updates_existing(self, mock_github):
        """Test a second run edits the comment instead of adding one."""
        from hosting_deploy.services.reporter import post_or_update_comment

        comments = []

        async def create_comment(pr_number, body):
            comments.append({"id": 10, "body": body})
            return comments[-1]

        async def update_comment(comment_id, body):
            comments[0]["body"] = body
            return comments[0]

        mock_github.list_comments.side_effect = lambda pr_number: list(comments)
        mock_github.create_comment.side_effect = create_comment
        mock_github.update_comment.side_effect = update_comment

        await post_or_update_comment(mock_github, 42, "first")
        await post_or_update_comment(mock_github, 42, "second")

        assert len(comments) == 1
        assert comments[0]["body"].startswith("second")
        mock_github.update_comment.assert_awaited_once()
        assert mock_github.update_comment.await_args.args[0] == 10

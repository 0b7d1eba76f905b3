"""
FileShareRepository tests over the in-process share fake.
"""

from tests.fakes.azure_fakes import http_error


class TestLogs:

    async def test_upload_creates_share(self, share_repo, share_service):
        assert (await share_repo.upload_log("upload_1.log", "File uploaded: a")).unwrap() is True
        assert share_service.get_share_client("logs").created

    async def test_upload_then_download(self, share_repo):
        await share_repo.upload_log("a.log", "héllo")
        assert (await share_repo.download_log("a.log")).unwrap() == "héllo"

    async def test_download_missing(self, share_repo):
        await share_repo.upload_log("a.log", "x")
        assert (await share_repo.download_log("b.log")).is_not_found

    async def test_list_missing_share_is_empty(self, share_repo):
        result = await share_repo.list_logs()
        assert result.is_ok
        assert result.value == []

    async def test_list_skips_directories(self, share_repo, share_service):
        await share_repo.upload_log("a.log", "alpha")
        await share_repo.upload_log("b.log", "bravo!")
        share_service.get_share_client("logs").directories.append("archive")

        logs = (await share_repo.list_logs()).unwrap()
        by_name = {log.file_name: log for log in logs}
        assert set(by_name) == {"a.log", "b.log"}
        assert by_name["b.log"].content == "bravo!"
        assert by_name["b.log"].file_size == 6
        assert by_name["a.log"].file_path == "/a.log"
        assert by_name["a.log"].share_name == "logs"

    async def test_delete_if_exists(self, share_repo):
        await share_repo.upload_log("a.log", "x")
        assert (await share_repo.delete_log("a.log")).value is True
        assert (await share_repo.delete_log("a.log")).value is False

    async def test_other_share(self, share_repo, share_service):
        await share_repo.upload_log("a.log", "x", share_name="archive")
        assert share_service.get_share_client("archive").created
        assert (await share_repo.share_exists()).value is False
        assert (await share_repo.share_exists("archive")).value is True

    async def test_create_share(self, share_repo):
        assert (await share_repo.create_share()).value is True
        assert (await share_repo.create_share()).value is False

    async def test_transient_failure(self, share_repo, share_service):
        share_service.fail_with(http_error(503))
        assert (await share_repo.list_logs()).is_transient

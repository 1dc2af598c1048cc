"""Integration tests against a real git working tree."""

import base64
import shutil

import pytest
from git import Repo

from branch_commit.exceptions import ListingError, ReadError
from branch_commit.schemas import RunState
from branch_commit.services import (
    CommitPipeline,
    GitHubGraphQLClient,
    GitManager,
    parse_status_output,
)

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


@pytest.fixture
def checkout(tmp_path):
    """A repository with one commit, then edited the way a CI job would."""
    repo = Repo.init(tmp_path)
    (tmp_path / ".gitignore").write_text("*.log\n")
    (tmp_path / "edited.txt").write_text("before\n")
    (tmp_path / "removed.txt").write_text("bye\n")
    (tmp_path / "untouched.txt").write_text("same\n")
    repo.index.add([".gitignore", "edited.txt", "removed.txt", "untouched.txt"])
    repo.index.commit("initial")

    (tmp_path / "edited.txt").write_text("after\n")
    (tmp_path / "removed.txt").unlink()
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "new.md").write_text("# New\n")
    (tmp_path / "build.log").write_text("ignored\n")
    return tmp_path


@pytest.fixture
def moved_submodule(tmp_path, monkeypatch):
    """A repository whose embedded repository `lib` has moved past the recorded commit."""
    for name in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
        monkeypatch.setenv(name, "CI")
    for name in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
        monkeypatch.setenv(name, "ci@example.com")

    repo = Repo.init(tmp_path)
    lib = Repo.init(tmp_path / "lib")
    (tmp_path / "lib" / "lib.py").write_text("v1\n")
    lib.index.add(["lib.py"])
    lib.index.commit("v1")

    (tmp_path / "README.md").write_text("readme\n")
    repo.git.add("README.md", "lib")
    repo.git.commit("-m", "initial")

    (tmp_path / "lib" / "lib.py").write_text("v2\n")
    lib.index.add(["lib.py"])
    lib.index.commit("v2")
    return tmp_path


class TestGitWorkflow:
    """End-to-end runs over a real working tree and a stubbed API."""

    def test_lists_modified_deleted_and_untracked(self, checkout):
        result = GitManager(str(checkout)).list_changed_paths()

        assert result.returncode == 0
        assert result.stderr == ""
        assert set(parse_status_output(result.stdout)) == {
            "edited.txt",
            "removed.txt",
            "docs/new.md",
        }

    def test_clean_tree_lists_nothing(self, tmp_path):
        repo = Repo.init(tmp_path)
        (tmp_path / "a.txt").write_text("a")
        repo.index.add(["a.txt"])
        repo.index.commit("initial")

        result = GitManager(str(tmp_path)).list_changed_paths()

        assert parse_status_output(result.stdout) == []

    def test_not_a_repository(self, tmp_path):
        with pytest.raises(ListingError):
            GitManager(str(tmp_path / "missing")).list_changed_paths()

    @pytest.mark.asyncio
    async def test_commits_working_tree(self, checkout, target, github_stub):
        git_manager = GitManager(str(checkout))

        async with GitHubGraphQLClient(
            token="test_token",
            url="https://api.github.test/graphql",
            transport=github_stub.transport(),
        ) as client:
            outcome = await CommitPipeline(target, git_manager, client).run()

        assert outcome.state == RunState.SUCCEEDED
        sent = github_stub.mutations[0]["variables"]["input"]["fileChanges"]
        additions = {a["path"]: base64.b64decode(a["contents"]) for a in sent["additions"]}
        assert additions == {"edited.txt": b"after\n", "docs/new.md": b"# New\n"}
        assert sent["deletions"] == [{"path": "removed.txt"}]

    @pytest.mark.asyncio
    async def test_names_with_quotes_are_uploaded(self, checkout, target, github_stub):
        """Test paths git would C-quote are listed and committed verbatim."""
        (checkout / 'say "hi".txt').write_text("hi\n")
        (checkout / "tab\tname.txt").write_text("tab\n")

        async with GitHubGraphQLClient(
            token="test_token",
            url="https://api.github.test/graphql",
            transport=github_stub.transport(),
        ) as client:
            await CommitPipeline(target, GitManager(str(checkout)), client).run()

        sent = github_stub.mutations[0]["variables"]["input"]["fileChanges"]
        additions = {a["path"]: base64.b64decode(a["contents"]) for a in sent["additions"]}
        assert additions['say "hi".txt'] == b"hi\n"
        assert additions["tab\tname.txt"] == b"tab\n"
        assert sent["deletions"] == [{"path": "removed.txt"}]

    def test_moved_submodule_is_listed(self, moved_submodule):
        result = GitManager(str(moved_submodule)).list_changed_paths()

        assert parse_status_output(result.stdout) == ["lib"]

    @pytest.mark.asyncio
    async def test_moved_submodule_is_read_error(self, moved_submodule, target, github_stub):
        """Test a submodule directory is never sent as a deletion."""
        async with GitHubGraphQLClient(
            token="test_token",
            url="https://api.github.test/graphql",
            transport=github_stub.transport(),
        ) as client:
            pipeline = CommitPipeline(target, GitManager(str(moved_submodule)), client)
            with pytest.raises(ReadError) as exc_info:
                await pipeline.run()

        assert exc_info.value.path == "lib"
        assert github_stub.requests == []

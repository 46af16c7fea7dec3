import contextlib
import os
import pathlib
import sys

import pytest

from minigit.main import main

HELLO_HASH = "ce013625030ba8dba906f756967f9e9ca394464a"


@pytest.fixture
def repo(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("GIT_DIR", raising=False)
    with contextlib.chdir(tmp_path):
        assert main(["init"]) == 0
        capsys.readouterr()
        yield tmp_path


class TestMain:
    def test_init(self, tmp_path, monkeypatch, capsys):
        monkeypatch.delenv("GIT_DIR", raising=False)
        with contextlib.chdir(tmp_path):
            assert main(["init"]) == 0
        assert "Initialized empty repository" in capsys.readouterr().out
        assert (tmp_path / ".git" / "HEAD").read_text() == "ref: refs/heads/main\n"

    def test_init_twice_fails(self, repo, capsys):
        assert main(["init"]) == 1
        assert capsys.readouterr().err.startswith("IoFailure: .git")

    def test_git_dir_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GIT_DIR", "store")
        with contextlib.chdir(tmp_path):
            assert main(["init"]) == 0
        assert (tmp_path / "store" / "objects").is_dir()

    @pytest.mark.parametrize("write", [True, False])
    def test_hash_object(self, repo, capsys, write):
        (repo / "hello.txt").write_text("hello\n")
        params = ["hash-object", "hello.txt"]
        if write:
            params.insert(1, "-w")
        assert main(params) == 0
        assert capsys.readouterr().out == HELLO_HASH + "\n"
        assert (repo / ".git/objects/ce" / HELLO_HASH[2:]).exists() == write

    def test_cat_file(self, repo, capsys):
        (repo / "hello.txt").write_text("hello\n")
        main(["hash-object", "-w", "hello.txt"])
        capsys.readouterr()

        assert main(["cat-file", "-p", HELLO_HASH]) == 0
        assert capsys.readouterr().out == "hello\n"
        assert main(["cat-file", "-t", HELLO_HASH]) == 0
        assert capsys.readouterr().out == "blob\n"
        assert main(["cat-file", "-s", HELLO_HASH]) == 0
        assert capsys.readouterr().out == "6\n"

    def test_cat_file_not_found(self, repo, capsys):
        assert main(["cat-file", "-p", "deadbeef" * 5]) == 1
        err = capsys.readouterr().err
        assert err.startswith("ObjectNotFound: ")
        assert "deadbeef" * 5 in err

    def test_cat_file_invalid_identifier(self, repo, capsys):
        assert main(["cat-file", "-p", "xyz"]) == 1
        assert capsys.readouterr().err.startswith("InvalidIdentifier: ")

    def test_write_tree_and_ls_tree(self, repo, capsys):
        (repo / "src").mkdir()
        (repo / "src" / "main.py").write_text("print('hi')\n")
        (repo / "hello.txt").write_text("hello\n")

        assert main(["write-tree"]) == 0
        tree_hash = capsys.readouterr().out.strip()
        assert len(tree_hash) == 40

        assert main(["ls-tree", "--name-only", tree_hash]) == 0
        assert capsys.readouterr().out == "hello.txt\nsrc\n"

        assert main(["ls-tree", tree_hash]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == f"100644 blob {HELLO_HASH}\thello.txt"
        assert lines[1].startswith("040000 tree ")
        assert lines[1].endswith("\tsrc")

        assert main(["cat-file", "-p", tree_hash]) == 0
        assert capsys.readouterr().out.splitlines() == lines

    def test_ls_tree_on_blob(self, repo, capsys):
        (repo / "hello.txt").write_text("hello\n")
        main(["hash-object", "-w", "hello.txt"])
        capsys.readouterr()
        assert main(["ls-tree", HELLO_HASH]) == 1
        assert capsys.readouterr().err.startswith("KindMismatch: ")

    @pytest.mark.skipif(
        sys.platform != "linux", reason="needs byte file names outside UTF-8"
    )
    def test_write_tree_non_utf8_file_name(self, repo, capsys):
        with open(os.path.join(os.fsencode(repo), b"bad\xff.txt"), "wb") as f:
            f.write(b"x")
        assert main(["write-tree"]) == 1
        err = capsys.readouterr().err
        assert err.startswith("IoFailure: ")
        assert "name is not valid UTF-8" in err

    def test_missing_command(self):
        with pytest.raises(SystemExit):
            main([])

    def test_verbose_logs_writes(self, repo, caplog):
        (repo / "hello.txt").write_text("hello\n")
        with caplog.at_level("DEBUG", logger="minigit"):
            assert main(["-v", "hash-object", "-w", "hello.txt"]) == 0
        assert any(HELLO_HASH in record.getMessage() for record in caplog.records)
        assert pathlib.Path(".git/objects/ce").is_dir()

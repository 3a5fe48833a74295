"""Tests for the CLI module."""

import json
import logging

import pytest

from landing_publisher.cli import main


@pytest.fixture
def publish_env(monkeypatch, publish_secret):
    """Environment with a publish secret and no optional collaborators."""
    monkeypatch.setenv("STUDIO_PUBLISH_SECRET", publish_secret)
    monkeypatch.setenv("SITE_URL", "https://pages.example.com")
    for var in (
        "REVALIDATE_SECRET",
        "POSTHOG_PERSONAL_API_KEY",
        "SUPABASE_URL",
        "SUPABASE_SERVICE_ROLE",
        "APP_ENV",
    ):
        monkeypatch.delenv(var, raising=False)


def publish_args(raw_file, store_dir, *extra):
    return [
        "publish",
        str(raw_file),
        "--page-url-key", "acme-vendor-1025",
        "--buyer-id", "acme",
        "--seller-id", "vendor",
        "--mmyy", "1025",
        "--store-dir", str(store_dir),
        *extra,
    ]


class TestCLIValidate:
    """Tests for the validate command."""

    def test_valid_file(self, raw_file, caplog):
        """validate exits 0 for valid content."""
        caplog.set_level(logging.INFO)

        result = main(["validate", str(raw_file)])

        assert result == 0
        assert "Valid content, sha" in caplog.text

    def test_invalid_file(self, tmp_path, caplog):
        """validate exits 1 and logs error codes."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"BuyersName": "Acme"}))

        result = main(["validate", str(path)])

        assert result == 1
        assert "E-HERO-REQ" in caplog.text

    def test_json_output(self, raw_file, capsys):
        """validate --json prints the full result."""
        result = main(["validate", str(raw_file), "--json"])

        payload = json.loads(capsys.readouterr().out)
        assert result == 0
        assert payload["isValid"] is True
        assert payload["normalized"]["hero"]["headline"] == "Reduce costs by 40%"
        assert len(payload["contentSha"]) == 64

    def test_unreadable_file(self, tmp_path, caplog):
        """validate fails cleanly when the file is not JSON."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        result = main(["validate", str(path)])

        assert result == 1
        assert "Failed to read" in caplog.text


class TestCLIHash:
    """Tests for the hash command."""

    def test_prints_hash(self, raw_file, capsys):
        """hash prints the content hash only."""
        result = main(["hash", str(raw_file)])

        out = capsys.readouterr().out.strip()
        assert result == 0
        assert len(out) == 64

    def test_hash_matches_validate(self, raw_file, capsys):
        """hash agrees with the validation result."""
        main(["hash", str(raw_file)])
        digest = capsys.readouterr().out.strip()
        main(["validate", str(raw_file), "--json"])
        payload = json.loads(capsys.readouterr().out)

        assert payload["contentSha"] == digest

    def test_invalid_content_has_no_hash(self, tmp_path, capsys):
        """hash refuses invalid content."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({}))

        result = main(["hash", str(path)])

        assert result == 1
        assert capsys.readouterr().out == ""


class TestCLIPublish:
    """Tests for the publish command."""

    def test_publish_to_file_store(self, publish_env, raw_file, tmp_path, capsys):
        """publish writes the page and prints the result."""
        store_dir = tmp_path / "store"

        result = main(publish_args(raw_file, store_dir))

        payload = json.loads(capsys.readouterr().out)
        assert result == 0
        assert payload["ok"] is True
        assert payload["changed"] is True
        assert payload["url"] == "https://pages.example.com/p/acme-vendor-1025"
        assert (store_dir / "acme-vendor-1025.json").exists()

    def test_wrong_secret(self, publish_env, raw_file, tmp_path, capsys, caplog):
        """publish exits 1 on authorization failure."""
        result = main(publish_args(raw_file, tmp_path / "store", "--secret", "nope"))

        payload = json.loads(capsys.readouterr().out)
        assert result == 1
        assert payload["ok"] is False
        assert "Publish failed: Unauthorized" in caplog.text

    def test_invalid_metadata(self, publish_env, raw_file, tmp_path, capsys):
        """publish reports metadata validation errors."""
        args = publish_args(raw_file, tmp_path / "store")
        args[args.index("1025")] = "1325"

        result = main(args)

        payload = json.loads(capsys.readouterr().out)
        assert result == 1
        assert payload["validationErrors"][0]["path"] == "mmyy"

    def test_requires_address(self, raw_file):
        """publish needs a page key or a subdomain."""
        with pytest.raises(SystemExit):
            main(["publish", str(raw_file), "--buyer-id", "a", "--seller-id", "b", "--mmyy", "1025"])


class TestCLIShowAndArchive:
    """Tests for the show and archive commands."""

    @pytest.fixture
    def published(self, publish_env, raw_file, tmp_path, capsys):
        store_dir = tmp_path / "store"
        assert main(publish_args(raw_file, store_dir)) == 0
        capsys.readouterr()
        return store_dir

    def test_show_content(self, published, capsys):
        """show prints the stored content tree."""
        result = main(["show", "acme-vendor-1025", "--store-dir", str(published)])

        tree = json.loads(capsys.readouterr().out)
        assert result == 0
        assert tree["hero"]["headline"] == "Reduce costs by 40%"

    def test_show_metadata(self, published, capsys):
        """show --metadata prints page-head metadata."""
        result = main([
            "show", "acme-vendor-1025", "--metadata", "--store-dir", str(published),
        ])

        metadata = json.loads(capsys.readouterr().out)
        assert result == 0
        assert metadata["title"] == "Reduce costs by 40%"

    def test_show_missing(self, publish_env, tmp_path, caplog):
        """show exits 1 for an unknown page."""
        result = main(["show", "missing", "--store-dir", str(tmp_path / "store")])

        assert result == 1
        assert "No published page for missing" in caplog.text

    def test_archive(self, published, capsys):
        """archive takes the page offline."""
        result = main(["archive", "acme-vendor-1025", "--store-dir", str(published)])

        assert result == 0
        assert main(["show", "acme-vendor-1025", "--store-dir", str(published)]) == 1

    def test_archive_missing(self, publish_env, tmp_path, caplog):
        """archive exits 1 for an unknown page."""
        result = main(["archive", "missing", "--store-dir", str(tmp_path / "store")])

        assert result == 1
        assert "No landing page found for missing" in caplog.text


class TestCLISuggestSlug:
    """Tests for the suggest-slug command."""

    def test_suggest(self, capsys):
        """suggest-slug prints a versioned key."""
        result = main(["suggest-slug", "Acme Corp", "Vendor Inc", "1025", "--version", "2"])

        assert result == 0
        assert capsys.readouterr().out.strip() == "acme-corp-vendor-inc-1025-v2"


class TestCLIHelp:
    """Tests for running without a command."""

    def test_no_command_prints_help(self, capsys):
        """Running with no command prints usage and exits 0."""
        result = main([])

        assert result == 0
        assert "landing-publisher" in capsys.readouterr().out

"""Unit tests for object storage validation and admin authentication."""

from datetime import datetime, timedelta, timezone

import pytest

from festival_cms.services.auth import (
    AuthService,
    AuthenticationError,
    hash_password,
    needs_rehash,
    verify_password,
)
from festival_cms.store.storage import (
    InvalidUploadError,
    StorageError,
    get_media_category,
    validate_upload,
)

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
PDF = b"%PDF-1.7\n" + b"\x00" * 16


class TestUploadValidation:
    def test_accepts_known_types(self):
        assert validate_upload(PNG, "logo.png", 1024) == "image/png"
        assert validate_upload(PDF, "programme.pdf", 1024) == "application/pdf"
        assert validate_upload(b"<svg></svg>", "icon.svg", 1024) == "image/svg+xml"

    def test_rejects_empty_and_oversized(self):
        with pytest.raises(InvalidUploadError):
            validate_upload(b"", "logo.png", 1024)
        with pytest.raises(InvalidUploadError, match="exceeds"):
            validate_upload(PNG, "logo.png", 8)

    def test_rejects_unsupported_extension(self):
        with pytest.raises(InvalidUploadError):
            validate_upload(b"MZ...", "setup.exe", 1024)

    def test_rejects_signature_mismatch(self):
        with pytest.raises(InvalidUploadError, match="mismatch"):
            validate_upload(PNG, "photo.jpg", 1024)
        with pytest.raises(InvalidUploadError, match="mismatch"):
            validate_upload(b"plain text", "photo.jpg", 1024)

    def test_rejects_other_riff_containers_as_webp(self):
        wav = b"RIFF\x24\x00\x00\x00WAVEfmt \x10\x00\x00\x00\x01\x00\x01\x00" + b"\x00" * 24
        with pytest.raises(InvalidUploadError, match="mismatch"):
            validate_upload(wav, "clip.webp", 1024)

    def test_media_category(self):
        assert get_media_category("a.JPG") == "image"
        assert get_media_category("b.pdf") == "document"
        assert get_media_category("c.mp3") is None


class TestObjectStorage:
    @pytest.mark.asyncio
    async def test_upload_and_open(self, storage):
        stored = await storage.upload_file("partners", "logo.png", PNG)
        assert stored.path.startswith("partners/")
        assert stored.path.endswith(".png")
        assert stored.public_url == f"http://test/api/v1/media/{stored.path}"
        assert storage.open(stored.path).read_bytes() == PNG

    def test_paths_cannot_escape_root(self, storage):
        for path in ("../secret", "/etc/passwd", "a/../../b", ""):
            with pytest.raises(StorageError):
                storage.resolve(path)

    def test_make_key_sanitizes_folder(self, storage):
        key = storage.make_key("../gallery//2025/", "Photo.PNG")
        assert key.startswith("gallery/2025/")
        assert key.endswith(".png")
        assert storage.make_key("", "a.pdf").startswith("global/")

    def test_open_missing_object(self, storage):
        with pytest.raises(StorageError):
            storage.open("gallery/missing.png")


class TestAuthService:
    def test_hash_round_trip(self):
        encoded = hash_password("s3cret")
        assert encoded.startswith("$argon2id$")
        assert verify_password("s3cret", encoded)
        assert not verify_password("wrong", encoded)
        assert not verify_password("s3cret", "garbage")
        assert not needs_rehash(encoded)

    def test_sign_in_and_out(self):
        auth = AuthService("admin", hash_password("pw"))
        session = auth.sign_in("admin", "pw")
        assert auth.get_session(session.token) is session
        assert session.expires_at.utcoffset() == timedelta(0)
        auth.sign_out(session.token)
        assert auth.get_session(session.token) is None

    def test_rejects_bad_credentials(self):
        auth = AuthService("admin", hash_password("pw"))
        with pytest.raises(AuthenticationError):
            auth.sign_in("admin", "nope")
        with pytest.raises(AuthenticationError):
            auth.sign_in("root", "pw")

    def test_non_ascii_username_is_rejected_not_crashed(self):
        auth = AuthService("admin", hash_password("pw"))
        with pytest.raises(AuthenticationError):
            auth.sign_in("adminé", "pw")

        accented = AuthService("adminé", hash_password("pw"))
        assert accented.sign_in("adminé", "pw").username == "adminé"

    def test_malformed_configured_hash_rejects(self):
        auth = AuthService("admin", "pbkdf2_sha256$notanumber$salt$digest")
        with pytest.raises(AuthenticationError):
            auth.sign_in("admin", "pw")

    def test_sign_in_disabled_without_hash(self):
        with pytest.raises(AuthenticationError, match="not configured"):
            AuthService("admin", None).sign_in("admin", "anything")

    def test_expired_sessions_are_dropped(self):
        auth = AuthService("admin", hash_password("pw"))
        session = auth.sign_in("admin", "pw")
        session.expires_at = datetime.now(timezone.utc) - timedelta(seconds=1)
        assert auth.get_session(session.token) is None
        assert auth.get_session(None) is None

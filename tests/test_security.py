import hashlib

from app.travelsite.security import hash_password, new_session_id, verify_password


class TestPasswordHashing:
    def test_format_is_hash_dot_salt(self):
        stored = hash_password("secret-1")
        hashed, salt = stored.split(".")
        assert len(hashed) == 128
        assert len(salt) == 32
        int(hashed, 16)
        int(salt, 16)

    def test_salted(self):
        assert hash_password("secret-1") != hash_password("secret-1")

    def test_verify(self):
        stored = hash_password("secret-1")
        assert verify_password("secret-1", stored) is True
        assert verify_password("secret-2", stored) is False

    def test_verify_missing_or_malformed(self):
        assert verify_password("secret-1", None) is False
        assert verify_password("secret-1", "") is False
        assert verify_password("secret-1", "zz.zz") is False
        assert verify_password("secret-1", "nodot") is False

    def test_accepts_hashes_keyed_by_salt_text(self):
        # Salt is used as its hex text, not the decoded bytes.
        salt = "00112233445566778899aabbccddeeff"
        digest = hashlib.scrypt(b"admin123", salt=salt.encode("utf-8"), n=16384, r=8, p=1, dklen=64, maxmem=64 * 1024 * 1024)
        assert verify_password("admin123", f"{digest.hex()}.{salt}") is True


def test_session_ids_are_unique_and_long():
    ids = {new_session_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(len(i) >= 40 for i in ids)

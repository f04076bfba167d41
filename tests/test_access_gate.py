"""
Tests for password hashing and verification.
"""
from shortlink_app.services.access_gate import AccessGate


class TestAccessGate:

    def test_hash_is_not_plaintext(self):
        gate = AccessGate(rounds=4)

        password_hash = gate.hash("secret")

        assert "secret" not in password_hash
        assert password_hash.startswith("$2")

    def test_verify_accepts_correct_password(self):
        gate = AccessGate(rounds=4)

        assert gate.verify("secret", gate.hash("secret")) is True

    def test_verify_rejects_wrong_password(self):
        gate = AccessGate(rounds=4)

        assert gate.verify("wrong", gate.hash("secret")) is False

    def test_hashes_are_salted(self):
        """Same password twice gives two different hashes, both valid"""
        gate = AccessGate(rounds=4)

        first = gate.hash("secret")
        second = gate.hash("secret")

        assert first != second
        assert gate.verify("secret", first)
        assert gate.verify("secret", second)

    def test_cost_factor_is_encoded_in_hash(self):
        gate = AccessGate(rounds=5)

        assert gate.hash("secret").split("$")[2] == "05"

    def test_unicode_passwords(self):
        gate = AccessGate(rounds=4)

        password_hash = gate.hash("pässwörd-🔑")

        assert gate.verify("pässwörd-🔑", password_hash)
        assert not gate.verify("passwort-🔑", password_hash)

    def test_long_passwords_use_first_72_bytes(self):
        gate = AccessGate(rounds=4)
        long_password = "x" * 100

        password_hash = gate.hash(long_password)

        assert gate.verify(long_password, password_hash)
        assert gate.verify("x" * 72 + "different tail", password_hash)
        assert not gate.verify("x" * 71, password_hash)

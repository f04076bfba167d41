"""
Tests for random short code generation.
"""
import string

import pytest

from shortlink_app.config import Settings, URL_SAFE_ALPHABET
from shortlink_app.services.code_generator import CodeGenerator


class TestCodeGenerator:
    """Test random code generation"""

    def test_generates_configured_length(self):
        generator = CodeGenerator(length=6)

        for _ in range(50):
            assert len(generator.generate()) == 6

    def test_uses_only_alphabet_symbols(self):
        generator = CodeGenerator(length=8, alphabet="abc")

        for _ in range(50):
            assert set(generator.generate()) <= set("abc")

    def test_default_alphabet_is_url_safe(self):
        generator = CodeGenerator()

        assert generator.alphabet == URL_SAFE_ALPHABET
        assert len(generator.alphabet) == 64
        allowed = set(string.ascii_letters + string.digits + "_-")
        assert set(generator.alphabet) == allowed

    def test_codes_are_not_repeated_in_small_sample(self):
        """64^6 keyspace: a few hundred codes should never collide"""
        generator = CodeGenerator(length=6)

        codes = {generator.generate() for _ in range(500)}

        assert len(codes) == 500

    def test_every_symbol_gets_drawn(self):
        """Rough uniformity check: all symbols of a small alphabet appear"""
        generator = CodeGenerator(length=1, alphabet="0123456789")

        seen = {generator.generate() for _ in range(1000)}

        assert seen == set("0123456789")

    def test_keyspace_size(self):
        assert CodeGenerator(length=6).keyspace_size == 64 ** 6
        assert CodeGenerator(length=3, alphabet="ab").keyspace_size == 8

    def test_from_settings(self):
        settings = Settings(code_length=9, code_alphabet="xyz")

        generator = CodeGenerator.from_settings(settings)

        assert generator.length == 9
        assert generator.alphabet == "xyz"

    @pytest.mark.parametrize("length", [0, -1])
    def test_rejects_non_positive_length(self, length):
        with pytest.raises(ValueError):
            CodeGenerator(length=length)

    def test_rejects_tiny_alphabet(self):
        with pytest.raises(ValueError):
            CodeGenerator(alphabet="a")

    def test_rejects_repeated_symbols(self):
        with pytest.raises(ValueError):
            CodeGenerator(alphabet="aab")

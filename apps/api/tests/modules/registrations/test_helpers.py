"""
Unit tests for registration helpers.
"""

import pytest

from infosys.core.config import settings
from infosys.core.exceptions import InvalidInputError
from infosys.modules.registrations.helpers import (
    PASSCODE_ALPHABET,
    generate_passcode,
    is_valid_email,
    is_valid_reg_number,
    validate_signup_fields,
)


class TestGeneratePasscode:
    def test_default_length_and_alphabet(self):
        passcode = generate_passcode()
        assert len(passcode) == settings.passcode_length == 10
        assert set(passcode) <= set(PASSCODE_ALPHABET)

    def test_explicit_length(self):
        assert len(generate_passcode(8)) == 8

    def test_alphabet_is_alphanumeric(self):
        assert len(PASSCODE_ALPHABET) == 62
        assert PASSCODE_ALPHABET.isalnum()

    def test_passcodes_differ(self):
        assert len({generate_passcode() for _ in range(50)}) == 50


class TestRegNumber:
    @pytest.mark.parametrize(
        "reg_number",
        ["24/is/co/346", "24/IS/CO/346", "99/abcd/wxyz/1234", "00/ab/cd/000", " 24/is/co/346 "],
    )
    def test_valid(self, reg_number):
        assert is_valid_reg_number(reg_number)

    @pytest.mark.parametrize(
        "reg_number",
        [
            "4/is/co/346",
            "244/is/co/346",
            "24/i/co/346",
            "24/abcde/co/346",
            "24/is/co/12345",
            "24/is/co/34",
            "24/1s/co/346",
            "24/is/co/346/extra",
            "24\\is\\co\\346",
            "\u0662\u0664/is/co/\u0663\u0664\u0666",
            "24/is/\u212ao/346",
        ],
    )
    def test_invalid(self, reg_number):
        assert not is_valid_reg_number(reg_number)


class TestEmail:
    def test_any_domain_by_default(self):
        assert is_valid_email("student@gmail.com")
        assert is_valid_email("Student.Name@uniuyo.edu.ng")

    @pytest.mark.parametrize("email", ["no-at-sign", "two@@example.com", "a@b", "spaces in@example.com"])
    def test_malformed(self, email):
        assert not is_valid_email(email)

    def test_domain_restriction(self, monkeypatch):
        monkeypatch.setattr(settings, "allowed_email_domain", "uniuyo.edu.ng")

        assert is_valid_email("student@UNIUYO.edu.ng")
        assert not is_valid_email("student@gmail.com")


class TestValidateSignupFields:
    def test_valid_input_passes(self):
        validate_signup_fields("Ada Etuk", "24/is/co/346", "ada@example.com")

    def test_first_offending_field_is_reported(self):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_signup_fields("", "bad", "bad")
        assert exc_info.value.field == "name"

    def test_reg_number_message_shows_format(self):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_signup_fields("Ada", "bad", "ada@example.com")
        assert "YY/dept/code/XXX" in exc_info.value.message

    def test_domain_message(self, monkeypatch):
        monkeypatch.setattr(settings, "allowed_email_domain", "uniuyo.edu.ng")

        with pytest.raises(InvalidInputError) as exc_info:
            validate_signup_fields("Ada", "24/is/co/346", "ada@gmail.com")

        assert exc_info.value.field == "email"
        assert "uniuyo.edu.ng" in exc_info.value.message

import string
from datetime import datetime

import pytest

from infrakit.helper.strings import (
    RandomStringMode,
    create_order_no,
    gbk_to_utf8,
    generate_password,
    hide_cellphone,
    hide_email,
    hide_real_name,
    mask_cred_no,
    random_number_string,
    random_string,
    replace_string,
    utf8_to_gbk,
    verify_password,
)


def test_password_round_trip():
    password = "password"
    hashed = generate_password(password)
    assert hashed != password
    assert verify_password(hashed, password) is True
    assert verify_password(hashed, "secret") is False


def test_verify_password_rejects_garbage_hash():
    assert verify_password("not-a-hash", "password") is False


@pytest.mark.parametrize(
    "mode, allowed",
    [
        (RandomStringMode.NUMBER, set(string.digits)),
        (RandomStringMode.LETTER, set(string.ascii_letters)),
        (RandomStringMode.ALPHANUMERIC, set(string.ascii_letters + string.digits)),
        (
            RandomStringMode.COMPLEX,
            set(string.ascii_letters + string.digits + "!@#$%^&*()_+-=[],./;<>?"),
        ),
    ],
)
def test_random_string_charset(mode, allowed):
    value = random_string(200, mode)
    assert len(value) == 200
    assert set(value) <= allowed


def test_random_string_rejects_non_positive_length():
    with pytest.raises(ValueError):
        random_string(0, RandomStringMode.NUMBER)


def test_random_number_string():
    value = random_number_string(12)
    assert len(value) == 12
    assert value.isdigit()


def test_gbk_round_trip():
    text = "中文测试abc"
    gbk = utf8_to_gbk(text.encode("utf-8"))
    assert gbk != text.encode("utf-8")
    assert gbk_to_utf8(gbk).decode("utf-8") == text


def test_utf8_to_gbk_rejects_invalid_utf8():
    with pytest.raises(UnicodeError):
        utf8_to_gbk(b"\xff\xfe")


def test_create_order_no_shape():
    today = datetime.now().strftime("%Y%m%d")
    order_no = create_order_no()
    assert len(order_no) == 27
    assert order_no.isdigit()
    assert order_no.startswith(today)


def test_replace_string():
    assert replace_string("a-b-c", ["-", "a"], ["+", "x"]) == "x+b+c"


def test_replace_string_length_mismatch_returns_input():
    assert replace_string("a-b-c", ["-"], ["+", "x"]) == "a-b-c"


def test_hide_cellphone_full():
    assert hide_cellphone("13812345678") == "138****5678"


def test_hide_cellphone_short_forms():
    short = hide_cellphone("1234")
    assert short.startswith("123") and short.endswith("****")
    assert hide_cellphone("12") == "****"
    assert hide_cellphone("") == ""


def test_hide_email():
    assert hide_email("someone@example.com") == "s****@example.com"
    assert hide_email("") == ""
    assert hide_email("plain").startswith("p")
    assert hide_email("plain").endswith("****")


def test_mask_cred_no():
    cred = "110101199001011234"
    masked = mask_cred_no(cred)
    assert len(masked) == len(cred)
    assert masked[:4] == cred[:4]
    assert masked[-4:] == cred[-4:]
    assert set(masked[4:-4]) == {"*"}
    assert mask_cred_no("1234567") == "1234567"


def test_hide_real_name():
    long_name = hide_real_name("欧阳修文")
    assert long_name[0] == "欧" and long_name[-1] == "文" and long_name[1] == "*"
    assert len(long_name) == 3
    two = hide_real_name("李白")
    assert two[0] == "李" and two[1:] == "*"
    assert hide_real_name("王") == "王"
from datetime import date, datetime
from decimal import Decimal

from shared.helpers.address_helper import (
    decode_address, decode_guarantor, encode_address, format_address,
    format_address_short)
from shared.helpers.currency_helper import format_amount, format_currency
from shared.helpers.date_helper import (
    civil_date_of, day_of, format_date_short, format_long_date, format_time,
    format_today_short, month_name)
from shared.helpers.number_words_helper import amount_in_words, to_words
from rental_service.app.crud.contracts.contracts_crud import build_due_dates
from rental_service.app.crud.contracts.contract_renewals_crud import months_between

ADDRESS = {
    "zipCode": "01000-000",
    "street": "Rua A",
    "number": "10",
    "neighborhood": "Centro",
    "city": "São Paulo",
    "state": "SP",
}


# ---- addresses ----

def test_format_address_single_line():
    assert format_address(ADDRESS) == \
        "Rua A, 10, Centro, São Paulo - SP, CEP: 01000-000"


def test_format_address_with_complement_from_json_text():
    stored = encode_address({**ADDRESS, "complement": "Apto 2"})
    assert format_address(stored) == \
        "Rua A, 10, Apto 2, Centro, São Paulo - SP, CEP: 01000-000"


def test_format_address_keeps_separators_for_missing_parts():
    assert format_address({"street": "Rua B"}) == "Rua B, , ,  - , CEP: "


def test_format_address_falls_back_to_raw_text():
    assert format_address("Rua sem JSON, 5") == "Rua sem JSON, 5"
    assert format_address(None) == ""


def test_format_address_short_has_no_cep():
    assert format_address_short(ADDRESS) == "Rua A, 10, Centro, São Paulo - SP"


def test_decode_address_accepts_text_and_dict():
    assert decode_address(encode_address(ADDRESS)) == ADDRESS
    assert decode_address(ADDRESS) is ADDRESS


def test_decode_guarantor_ignores_malformed_json():
    assert decode_guarantor("{not json") is None
    assert decode_guarantor("{}") is None
    assert decode_guarantor('{"name": "Carla"}') == {"name": "Carla"}


# ---- money ----

def test_format_currency():
    assert format_currency(Decimal("1234.5")) == "R$ 1.234,50"
    assert format_currency(1500) == "R$ 1.500,00"
    assert format_currency(None) == ""


def test_format_amount_drops_symbol():
    assert format_amount(Decimal("950.00")) == "950,00"


def test_to_words_integer_part():
    assert to_words(0) == "zero"
    assert to_words(100) == "cem"
    assert to_words(101) == "cento e um"
    assert to_words(1000) == "mil"
    assert to_words(1_000_000) == "um milhão"
    assert to_words(Decimal("100.99")) == "cem"


def test_amount_in_words():
    assert amount_in_words(100) == "Cem reais"
    assert amount_in_words(1) == "Um real"
    assert amount_in_words(0) == "Zero reais"


# ---- dates ----

def test_stored_dates_are_shifted_back_one_day():
    assert format_date_short(date(2024, 3, 15)) == "14/03/2024"
    assert format_date_short("2024-03-01") == "29/02/2024"
    assert format_date_short(None) == ""


def test_civil_date_is_pinned_to_noon():
    civil = civil_date_of(date(2024, 3, 15))
    assert (civil.hour, civil.minute) == (12, 0)
    assert civil.tzinfo is not None


def test_date_parts_use_the_compensated_date():
    assert day_of(date(2024, 4, 10)) == 9
    assert month_name(date(2024, 4, 1)) == "Março"


def test_wall_clock_formats():
    moment = datetime(2026, 10, 17, 9, 5)
    assert format_long_date(moment) == "sábado, 17 de outubro de 2026"
    assert format_today_short(moment) == "17/10/2026"
    assert format_time(moment) == "09:05"


# ---- installments ----

def test_due_dates_clamp_to_month_end():
    assert build_due_dates(date(2024, 1, 31), 3) == [
        date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31)]


def test_due_dates_follow_payment_day():
    assert build_due_dates(date(2024, 1, 20), 2, payment_day=5) == [
        date(2024, 1, 5), date(2024, 2, 5)]


def test_months_between():
    assert months_between(date(2024, 1, 1), date(2025, 1, 1)) == 12
    assert months_between(date(2024, 1, 1), date(2024, 1, 20)) == 1

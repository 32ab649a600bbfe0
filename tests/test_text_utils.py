import pytest

from utils.constants import find_language, find_role, language_label
from utils.text_utils import (
    count_text,
    decode_base64,
    encode_base64,
    normalize_branding,
    reverse_text,
    title_case,
)
from utils.whatsapp_utils import (
    extract_message_text,
    is_mentioned,
    jid_from_phone,
    whatsapp_address,
)

BOT = "Cool Shot AI"
COMPANY = "Cool Shot Systems"

SAMPLES = [
    "I'm an AI language model developed by OpenAI.",
    "I was created by Google DeepMind. How can I help?",
    "As Gemini AI, I can say Bard and ChatGPT are friends.",
    "Google's AI says hi. I'm here to help!",
    "Ask GiftedTech or Gifted AI or Prof-Tech MVAI.",
    "Cool Shot Designs/Tech built this.",
    "He said “hello” and left.",
    "Plain answer with nothing to rewrite.",
    "",
]


def normalize(text):
    return normalize_branding(text, BOT, COMPANY)


@pytest.mark.parametrize("company", [COMPANY, "Cool Shot Systems Ltd."])
@pytest.mark.parametrize("text", SAMPLES)
def test_normalization_is_idempotent(text, company):
    once = normalize_branding(text, BOT, company)
    assert normalize_branding(once, BOT, company) == once


def test_company_name_with_period_is_not_doubled():
    company = "Cool Shot Systems Ltd."

    once = normalize_branding("I was created by Google. Ask away.", BOT, company)

    assert once == "I was created by Cool Shot Systems Ltd. Ask away."
    assert normalize_branding(once, BOT, company) == once


def test_provider_names_are_rewritten():
    assert normalize("I'm an AI language model.") == "I'm Cool Shot AI, your intelligent assistant."
    assert normalize("I was developed by OpenAI researchers.\nBye") == "I was developed by Cool Shot Systems.\nBye"
    assert normalize("Ask ChatGPT or Bard") == "Ask Cool Shot AI or Cool Shot AI"
    assert normalize("Google's AI") == "Cool Shot AI"
    assert normalize("I'm here to help") == "I'm Cool Shot AI, here to help"
    assert normalize("Cool Shot Designs/Tech") == "Cool Shot Systems"


def test_word_boundaries_are_respected():
    assert normalize("Googleplex and geminids") == "Googleplex and geminids"


def test_smart_quotes_and_whitespace():
    assert normalize("  “quoted”  ") == '"quoted"'


def test_count_text():
    assert count_text("Hello  World") == {"words": 2, "chars": 12, "chars_no_spaces": 10}
    assert count_text("   ")["words"] == 0


def test_text_conversions():
    assert reverse_text("abc") == "cba"
    assert title_case("hello wORLD it's-fine") == "Hello World It's-fine"


def test_base64():
    assert encode_base64("Hello World") == "SGVsbG8gV29ybGQ="
    assert decode_base64("SGVsbG8gV29ybGQ=") == "Hello World"
    with pytest.raises(ValueError):
        decode_base64("not base64!!")


def test_catalogue_lookups():
    assert find_role("doctor") == "Doctor"
    assert find_role("Wizard") is None
    assert find_language("ES")["code"] == "es"
    assert find_language("german")["code"] == "de"
    assert find_language("klingon") is None
    assert language_label("zz") == "🇬🇧 English"


def test_jid_conversions():
    assert jid_from_phone("whatsapp:+2348012345678") == "2348012345678@s.whatsapp.net"
    assert jid_from_phone("2348012345678") == "2348012345678@s.whatsapp.net"
    assert whatsapp_address("2348012345678@s.whatsapp.net") == "whatsapp:+2348012345678"


def test_extract_message_text_order():
    assert extract_message_text({"conversation": "a", "extendedTextMessage": {"text": "b"}}) == "a"
    assert extract_message_text({"extendedTextMessage": {"text": "b"}}) == "b"
    assert extract_message_text({"imageMessage": {"caption": "c"}}) == "c"
    assert extract_message_text({"videoMessage": {"caption": "d"}}) == "d"
    assert extract_message_text({"stickerMessage": {}}) is None
    assert extract_message_text(None) is None


def test_mention_gate_is_literal():
    assert is_mentioned("hey @2349000000000 what's up", "2349000000000")
    assert not is_mentioned("hey bot", "2349000000000")
    assert not is_mentioned(None, "2349000000000")

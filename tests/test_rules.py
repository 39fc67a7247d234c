import pytest

from symptom_checker.rules import Category, RULE_TABLE, match, matching_categories


@pytest.mark.parametrize("text, expected", [
    ("persistent cough", Category.RESPIRATORY),
    ("upset stomach", Category.GASTROINTESTINAL),
    ("feeling dizzy", Category.NEUROLOGICAL),
    ("sore knee", Category.MUSCULOSKELETAL),
    ("itchy rash", Category.SKIN),
    ("fever and chills", Category.FLU_LIKE),
    ("runny nose", Category.ENT),
    ("palpitations", Category.CARDIAC),
    ("constant anxiety", Category.MENTAL_HEALTH),
    ("blurry vision", Category.EYE),
])
def test_single_category_text(text, expected):
    assert match(text) == expected
    assert matching_categories(text) == [expected]


@pytest.mark.parametrize("text", [
    "I feel generally unwell",
    "numbness in my fingers",
    "lost my appetite",
    "xyz",
])
def test_no_keyword_returns_none(text):
    assert match(text) is None
    assert matching_categories(text) == []


def test_case_insensitive():
    assert match("COUGH and fever") == match("cough and fever") == Category.RESPIRATORY


def test_priority_beats_specificity():
    # "chest pain" is a cardiac keyword, but "chest" alone is respiratory and ranks first
    assert match("cough and chest pain") == Category.RESPIRATORY
    assert match("chest pain") == Category.RESPIRATORY
    assert matching_categories("cough and chest pain") == [Category.RESPIRATORY, Category.CARDIAC]


def test_shared_keyword_goes_to_higher_priority():
    # nausea is listed under both gastrointestinal and neurological
    assert match("nausea") == Category.GASTROINTESTINAL


def test_substring_containment():
    assert match("coughing all night") == Category.RESPIRATORY
    assert match("Vomiting since morning") == Category.GASTROINTESTINAL


def test_result_is_stable():
    text = "I have a bad cough and chest tightness"
    assert {match(text) for _ in range(50)} == {Category.RESPIRATORY}


def test_rule_table_order():
    assert [rule.category for rule in RULE_TABLE] == [
        Category.RESPIRATORY,
        Category.GASTROINTESTINAL,
        Category.NEUROLOGICAL,
        Category.MUSCULOSKELETAL,
        Category.SKIN,
        Category.FLU_LIKE,
        Category.ENT,
        Category.CARDIAC,
        Category.MENTAL_HEALTH,
        Category.EYE,
    ]
    assert [rule.priority for rule in RULE_TABLE] == sorted(rule.priority for rule in RULE_TABLE)

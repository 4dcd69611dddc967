"""
Tests for conjugations.py - the two-stage conjugation engine.
"""

import pytest

from doushi.constants import VerbClass, Voice, Mode, Modifier, LEGAL_MODIFIERS, legal_modifiers
from doushi.conjugations import (
    GODAN_STEMS, GODAN_TE_TA, Row,
    MalformedVerbError, IllegalModifierError,
    IchidanInflection, GodanInflection, SuruInflection, KuruInflection,
    apply_voice, apply_mode, check_modifiers, conjugate, conjugate_word,
    conjugation_table, get_godan_onbin, get_godan_stem, get_inflection,
    is_iku_verb, iter_legal_forms, modifier_combinations,
)
from doushi.lexicon import VerbRecord


POLITE = Modifier.POLITE
NEGATIVE = Modifier.NEGATIVE
PAST = Modifier.PAST


# =============================================================================
# Reference scenarios
# =============================================================================

class TestReferenceScenarios:
    """The fixed examples every implementation has to reproduce."""

    def test_kaku_polite(self, kaku):
        assert conjugate(kaku, Voice.DICTIONARY, Mode.STANDARD, {POLITE}) == "書きます"
        assert conjugate(kaku, Voice.DICTIONARY, Mode.STANDARD, {POLITE}, use_reading=True) == "かきます"

    def test_kaku_past(self, kaku):
        assert conjugate(kaku, Voice.DICTIONARY, Mode.STANDARD, {PAST}) == "書いた"
        assert conjugate(kaku, Voice.DICTIONARY, Mode.STANDARD, {PAST}, use_reading=True) == "かいた"

    def test_iku_past(self, iku):
        assert conjugate(iku, Voice.DICTIONARY, Mode.STANDARD, {PAST}) == "行った"
        assert conjugate(iku, Voice.DICTIONARY, Mode.STANDARD, {PAST}, use_reading=True) == "いった"

    def test_taberu_te_negative(self, taberu):
        assert conjugate(taberu, Voice.DICTIONARY, Mode.TE_FORM, {NEGATIVE}) == "食べなくて"
        assert conjugate(taberu, Voice.DICTIONARY, Mode.TE_FORM, {NEGATIVE}, use_reading=True) == "たべなくて"

    def test_kuru_imperative(self, kuru):
        assert conjugate(kuru, Voice.DICTIONARY, Mode.IMPERATIVE) == "来い"
        assert conjugate(kuru, Voice.DICTIONARY, Mode.IMPERATIVE, use_reading=True) == "こい"

    def test_yomu_potential_negative_past(self, yomu):
        stem = apply_voice("読む", VerbClass.GODAN, Voice.POTENTIAL)
        assert stem.text == "読める"
        assert stem.verb_class == VerbClass.ICHIDAN
        assert conjugate(yomu, Voice.POTENTIAL, Mode.STANDARD, {NEGATIVE, PAST}) == "読めなかった"
        assert conjugate(yomu, Voice.POTENTIAL, Mode.STANDARD, {PAST, NEGATIVE}, use_reading=True) == "よめなかった"


# =============================================================================
# Godan
# =============================================================================

class TestGodanStems:
    """Tests for the row tables."""

    def test_all_nine_endings(self):
        assert set(GODAN_STEMS) == set('うくぐすつぬぶむる')
        assert set(GODAN_TE_TA) == set(GODAN_STEMS)

    def test_u_row_is_dictionary_ending(self):
        for ending, rows in GODAN_STEMS.items():
            assert rows[Row.U] == ending

    def test_u_a_row_is_wa(self):
        assert get_godan_stem("買う", Row.A) == "買わ"

    @pytest.mark.parametrize("word,row,expected", [
        ("書く", Row.I, "書き"),
        ("泳ぐ", Row.A, "泳が"),
        ("話す", Row.E, "話せ"),
        ("待つ", Row.I, "待ち"),
        ("死ぬ", Row.O, "死の"),
        ("遊ぶ", Row.E, "遊べ"),
        ("読む", Row.A, "読ま"),
        ("帰る", Row.O, "帰ろ"),
    ])
    def test_rows(self, word, row, expected):
        assert get_godan_stem(word, row) == expected

    def test_bad_ending_raises(self):
        with pytest.raises(MalformedVerbError):
            get_godan_stem("食べ", Row.A)


class TestGodanOnbin:
    """Tests for te/ta sound changes."""

    @pytest.mark.parametrize("word,te,ta", [
        ("買う", "買って", "買った"),
        ("書く", "書いて", "書いた"),
        ("泳ぐ", "泳いで", "泳いだ"),
        ("話す", "話して", "話した"),
        ("待つ", "待って", "待った"),
        ("死ぬ", "死んで", "死んだ"),
        ("遊ぶ", "遊んで", "遊んだ"),
        ("読む", "読んで", "読んだ"),
        ("帰る", "帰って", "帰った"),
        ("行く", "行って", "行った"),
        ("いく", "いって", "いった"),
    ])
    def test_te_ta(self, word, te, ta):
        assert get_godan_onbin(word, te=True) == te
        assert get_godan_onbin(word, te=False) == ta

    def test_iku_detection(self):
        assert is_iku_verb("行く")
        assert is_iku_verb("ゆく")
        assert not is_iku_verb("書く")
        assert not is_iku_verb("聞く")

    def test_te_and_past_share_stem(self):
        """Past and te-form differ only in the final vowel (た/て, だ/で)."""
        for ending in GODAN_TE_TA:
            word = "あ" + ending
            te = conjugate_word(word, VerbClass.GODAN, mode=Mode.TE_FORM)
            ta = conjugate_word(word, VerbClass.GODAN, modifiers={PAST})
            assert te[:-1] == ta[:-1]
            assert (te[-1], ta[-1]) in {('て', 'た'), ('で', 'だ')}


class TestGodanForms:
    """Tests for the full standard table and other modes of a godan verb."""

    @pytest.mark.parametrize("modifiers,expected", [
        ((), "書く"),
        ((POLITE,), "書きます"),
        ((NEGATIVE,), "書かない"),
        ((PAST,), "書いた"),
        ((POLITE, NEGATIVE), "書きません"),
        ((POLITE, PAST), "書きました"),
        ((NEGATIVE, PAST), "書かなかった"),
        ((POLITE, NEGATIVE, PAST), "書きませんでした"),
    ])
    def test_standard(self, kaku, modifiers, expected):
        assert conjugate(kaku, Voice.DICTIONARY, Mode.STANDARD, modifiers) == expected

    def test_other_modes(self, kaku):
        assert conjugate(kaku, mode=Mode.TE_FORM) == "書いて"
        assert conjugate(kaku, mode=Mode.TE_FORM, modifiers={NEGATIVE}) == "書かなくて"
        assert conjugate(kaku, mode=Mode.VOLITIONAL) == "書こう"
        assert conjugate(kaku, mode=Mode.VOLITIONAL, modifiers={POLITE}) == "書きましょう"
        assert conjugate(kaku, mode=Mode.IMPERATIVE) == "書け"

    def test_u_verb_negative(self):
        assert conjugate_word("買う", VerbClass.GODAN, modifiers={NEGATIVE}) == "買わない"

    def test_voices(self, kaku):
        assert conjugate(kaku, Voice.POTENTIAL) == "書ける"
        assert conjugate(kaku, Voice.PASSIVE) == "書かれる"
        assert conjugate(kaku, Voice.CAUSATIVE) == "書かせる"
        assert conjugate(kaku, Voice.CAUSATIVE_PASSIVE) == "書かせられる"

    def test_voiced_stem_conjugates_as_ichidan(self, kaku, yomu):
        assert conjugate(kaku, Voice.PASSIVE, Mode.STANDARD, {POLITE}) == "書かれます"
        assert conjugate(kaku, Voice.CAUSATIVE, Mode.TE_FORM) == "書かせて"
        assert conjugate(yomu, Voice.CAUSATIVE_PASSIVE, Mode.STANDARD, {PAST}) == "読ませられた"
        assert conjugate(yomu, Voice.POTENTIAL, Mode.IMPERATIVE) == "読めろ"


# =============================================================================
# Ichidan
# =============================================================================

class TestIchidan:
    """Tests for ichidan verbs."""

    def test_standard(self, taberu):
        assert conjugate(taberu) == "食べる"
        assert conjugate(taberu, modifiers={POLITE}) == "食べます"
        assert conjugate(taberu, modifiers={NEGATIVE, PAST}) == "食べなかった"
        assert conjugate(taberu, modifiers={PAST}) == "食べた"

    def test_modes(self, taberu):
        assert conjugate(taberu, mode=Mode.TE_FORM) == "食べて"
        assert conjugate(taberu, mode=Mode.VOLITIONAL) == "食べよう"
        assert conjugate(taberu, mode=Mode.IMPERATIVE) == "食べろ"

    def test_voices(self, taberu):
        assert conjugate(taberu, Voice.POTENTIAL) == "食べられる"
        assert conjugate(taberu, Voice.CAUSATIVE) == "食べさせる"
        assert conjugate(taberu, Voice.CAUSATIVE_PASSIVE) == "食べさせられる"

    @pytest.mark.parametrize("lemma", ["食べる", "見る", "起きる", "教える", "信じる"])
    def test_passive_equals_potential(self, lemma):
        for mode in Mode:
            for modifiers in modifier_combinations(mode):
                passive = conjugate_word(lemma, VerbClass.ICHIDAN, Voice.PASSIVE, mode, modifiers)
                potential = conjugate_word(lemma, VerbClass.ICHIDAN, Voice.POTENTIAL, mode, modifiers)
                assert passive == potential


# =============================================================================
# Irregular and suru compounds
# =============================================================================

class TestKuru:
    """Tests for 来る in kanji and kana."""

    def test_kanji_stem_unchanged(self, kuru):
        assert conjugate(kuru, modifiers={POLITE}) == "来ます"
        assert conjugate(kuru, modifiers={NEGATIVE}) == "来ない"
        assert conjugate(kuru, mode=Mode.TE_FORM) == "来て"

    def test_kana_stem_alternates(self, kuru):
        assert conjugate(kuru, modifiers={POLITE}, use_reading=True) == "きます"
        assert conjugate(kuru, modifiers={NEGATIVE}, use_reading=True) == "こない"
        assert conjugate(kuru, modifiers={PAST}, use_reading=True) == "きた"
        assert conjugate(kuru, mode=Mode.TE_FORM, use_reading=True) == "きて"
        assert conjugate(kuru, mode=Mode.VOLITIONAL, use_reading=True) == "こよう"
        assert conjugate(kuru, mode=Mode.TE_FORM, modifiers={NEGATIVE}, use_reading=True) == "こなくて"

    def test_voices(self, kuru):
        assert conjugate(kuru, Voice.POTENTIAL, use_reading=True) == "こられる"
        assert conjugate(kuru, Voice.PASSIVE, use_reading=True) == "こられる"
        assert conjugate(kuru, Voice.CAUSATIVE, use_reading=True) == "こさせる"
        assert conjugate(kuru, Voice.CAUSATIVE_PASSIVE, use_reading=True) == "こさせられる"
        assert conjugate(kuru, Voice.POTENTIAL, Mode.STANDARD, {NEGATIVE}) == "来られない"


class TestSuru:
    """Tests for する and noun + する compounds."""

    def test_suru(self, suru):
        assert conjugate(suru, modifiers={POLITE}) == "します"
        assert conjugate(suru, modifiers={NEGATIVE}) == "しない"
        assert conjugate(suru, modifiers={PAST}) == "した"
        assert conjugate(suru, mode=Mode.TE_FORM) == "して"
        assert conjugate(suru, mode=Mode.VOLITIONAL) == "しよう"
        assert conjugate(suru, mode=Mode.IMPERATIVE) == "しろ"

    def test_suru_voices(self, suru):
        assert conjugate(suru, Voice.POTENTIAL) == "できる"
        assert conjugate(suru, Voice.PASSIVE) == "される"
        assert conjugate(suru, Voice.CAUSATIVE) == "させる"
        assert conjugate(suru, Voice.CAUSATIVE_PASSIVE) == "させられる"

    def test_compound_keeps_prefix(self, benkyou):
        assert conjugate(benkyou, modifiers={POLITE, PAST}) == "勉強しました"
        assert conjugate(benkyou, modifiers={NEGATIVE, PAST}) == "勉強しなかった"
        assert conjugate(benkyou, Voice.POTENTIAL) == "勉強できる"
        assert conjugate(benkyou, Voice.POTENTIAL, Mode.STANDARD, {NEGATIVE}) == "勉強できない"
        assert conjugate(benkyou, mode=Mode.VOLITIONAL, modifiers={POLITE}, use_reading=True) == "べんきょうしましょう"


class TestInflectionSelection:
    """Tests for get_inflection dispatch."""

    def test_dispatch(self):
        assert isinstance(get_inflection("食べる", VerbClass.ICHIDAN), IchidanInflection)
        assert isinstance(get_inflection("書く", VerbClass.GODAN), GodanInflection)
        assert isinstance(get_inflection("勉強する", VerbClass.SURU), SuruInflection)
        assert isinstance(get_inflection("する", VerbClass.IRREGULAR), SuruInflection)
        assert isinstance(get_inflection("来る", VerbClass.IRREGULAR), KuruInflection)
        assert isinstance(get_inflection("くる", VerbClass.IRREGULAR), KuruInflection)

    def test_accepts_string_class(self):
        assert isinstance(get_inflection("書く", "godan"), GodanInflection)


# =============================================================================
# Errors
# =============================================================================

class TestMalformedVerbs:
    """A class tag that does not fit the lemma fails on derivation."""

    @pytest.mark.parametrize("word,verb_class", [
        ("書く", VerbClass.ICHIDAN),
        ("食べ", VerbClass.GODAN),
        ("する", VerbClass.SURU),
        ("勉強", VerbClass.SURU),
        ("書く", VerbClass.IRREGULAR),
        ("", VerbClass.GODAN),
        ("まもる", VerbClass.ICHIDAN),
        ("する", VerbClass.ICHIDAN),
        ("ある", VerbClass.ICHIDAN),
        ("つくる", VerbClass.IRREGULAR),
    ])
    def test_raises(self, word, verb_class):
        with pytest.raises(MalformedVerbError) as exc_info:
            conjugate_word(word, verb_class, modifiers={NEGATIVE})
        assert exc_info.value.word == word

    def test_ichidan_row_message(self):
        with pytest.raises(MalformedVerbError, match="not i- or e-row"):
            conjugate_word("まもる", VerbClass.ICHIDAN)

    def test_i_and_e_row_ichidan_pass(self):
        assert conjugate_word("見る", VerbClass.ICHIDAN, modifiers={NEGATIVE}) == "見ない"
        assert conjugate_word("おちる", VerbClass.ICHIDAN, modifiers={NEGATIVE}) == "おちない"

    @pytest.mark.parametrize("word,expected", [
        ("持ってくる", "持ってこない"),
        ("出て来る", "出て来ない"),
        ("來る", "來ない"),
    ])
    def test_kuru_compounds_allowed(self, word, expected):
        assert conjugate_word(word, VerbClass.IRREGULAR, modifiers={NEGATIVE}) == expected

    def test_record_construction_is_lazy(self):
        verb = VerbRecord("書く", "かく", "to write", VerbClass.ICHIDAN)
        with pytest.raises(MalformedVerbError):
            conjugate(verb)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            conjugate_word("食べ", VerbClass.GODAN)


class TestIllegalModifiers:
    """Modifiers outside the mode's legal set are rejected."""

    @pytest.mark.parametrize("mode,modifiers", [
        (Mode.TE_FORM, {PAST}),
        (Mode.TE_FORM, {POLITE}),
        (Mode.VOLITIONAL, {NEGATIVE}),
        (Mode.VOLITIONAL, {PAST}),
        (Mode.IMPERATIVE, {POLITE}),
        (Mode.IMPERATIVE, {NEGATIVE}),
    ])
    def test_raises(self, kaku, mode, modifiers):
        with pytest.raises(IllegalModifierError) as exc_info:
            conjugate(kaku, Voice.DICTIONARY, mode, modifiers)
        assert exc_info.value.mode == mode
        assert exc_info.value.modifiers == frozenset(modifiers)

    def test_checked_before_stem(self):
        with pytest.raises(IllegalModifierError):
            conjugate_word("食べ", VerbClass.GODAN, mode=Mode.IMPERATIVE, modifiers={PAST})

    def test_apply_mode_checks_too(self):
        stem = apply_voice("書く", VerbClass.GODAN, Voice.DICTIONARY)
        with pytest.raises(IllegalModifierError):
            apply_mode(stem, Mode.TE_FORM, {PAST})

    def test_message_names_mode(self):
        with pytest.raises(IllegalModifierError, match="imperative"):
            check_modifiers(Mode.IMPERATIVE, {POLITE, PAST})

    def test_legal_sets_pass(self):
        for mode in Mode:
            assert check_modifiers(mode, legal_modifiers(mode)) == LEGAL_MODIFIERS[mode]


# =============================================================================
# Enumeration and determinism
# =============================================================================

class TestConjugationSpace:
    """Tests for modifier_combinations, iter_legal_forms and conjugation_table."""

    def test_combination_counts(self):
        assert len(modifier_combinations(Mode.STANDARD)) == 8
        assert len(modifier_combinations(Mode.TE_FORM)) == 2
        assert len(modifier_combinations(Mode.VOLITIONAL)) == 2
        assert modifier_combinations(Mode.IMPERATIVE) == [frozenset()]

    def test_combinations_start_empty(self):
        for mode in Mode:
            assert modifier_combinations(mode)[0] == frozenset()

    def test_legal_forms_are_legal(self):
        forms = list(iter_legal_forms())
        assert len(forms) == 65
        for voice, mode, modifiers in forms:
            assert modifiers <= legal_modifiers(mode)

    def test_table(self, kuru):
        table = conjugation_table(kuru, use_reading=True)
        assert len(table) == 65
        assert table[0] == (Voice.DICTIONARY, Mode.STANDARD, frozenset(), "くる")
        assert (Voice.DICTIONARY, Mode.IMPERATIVE, frozenset(), "こい") in table

    def test_deterministic(self, sample_verbs):
        for verb in sample_verbs:
            for voice in Voice:
                for mode in Mode:
                    assert conjugate(verb, voice, mode) == conjugate(verb, voice, mode)

    def test_modifier_order_irrelevant(self, kaku):
        assert conjugate(kaku, modifiers=[PAST, NEGATIVE, POLITE]) == \
            conjugate(kaku, modifiers=(POLITE, NEGATIVE, PAST))

    def test_accepts_string_values(self, kaku):
        assert conjugate(kaku, "potential", "standard", ["negative"]) == "書けない"

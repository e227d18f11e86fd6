from cadetpinball.pinball import RC_STRINGS, get_rc_int, get_rc_string, make_path_name


def test_known_strings():
    assert get_rc_string(24) == "- / Y Starts New Game"
    assert get_rc_string(168) == "PINBALL.DAT"
    assert get_rc_string(26) == "Player 1"


def test_missing_string_is_empty():
    assert get_rc_string(157) == ""
    assert get_rc_string(-1) == ""


def test_strings_match_table():
    for uid, text in RC_STRINGS.items():
        assert get_rc_string(uid) == text[:255]


def test_rc_int_reads_leading_number():
    assert get_rc_int(158) == 1
    assert get_rc_int(160) == 191
    assert get_rc_int(161) == 32


def test_rc_int_without_number_is_zero():
    assert get_rc_int(165) == 0


def test_rc_int_missing_is_none():
    assert get_rc_int(157) is None


def test_make_path_name():
    base = "sd:/apps/SpaceCadetPinball/Data/"
    assert make_path_name(base, "CADET.DAT") == base + "CADET.DAT"
    assert make_path_name("", "PINBALL.DAT") == "PINBALL.DAT"
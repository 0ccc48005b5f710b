from gamesrv.bitflag import Flag

SES_CLOSE = 0x00000001
FIGHT_CLOSE = 0x00000010
SES_INIT = 0x00000100


def test_new_flag_has_nothing():
    flag = Flag()
    assert not flag.has(SES_CLOSE)
    assert not flag.has(SES_INIT)


def test_add_then_has():
    flag = Flag()
    flag.add(SES_INIT)
    assert flag.has(SES_INIT)
    assert not flag.has(SES_CLOSE)


def test_add_is_idempotent():
    flag = Flag()
    flag.add(FIGHT_CLOSE)
    flag.add(FIGHT_CLOSE)
    assert flag.value == FIGHT_CLOSE


def test_remove_clears_only_that_bit():
    flag = Flag()
    flag.add(SES_CLOSE)
    flag.add(SES_INIT)
    flag.remove(SES_CLOSE)
    assert not flag.has(SES_CLOSE)
    assert flag.has(SES_INIT)


def test_has_with_combined_mask_is_any_bit():
    flag = Flag()
    flag.add(FIGHT_CLOSE)
    assert flag.has(SES_CLOSE | FIGHT_CLOSE)
    assert not flag.has(SES_CLOSE | SES_INIT)


def test_remove_missing_bit_keeps_value():
    flag = Flag()
    flag.add(SES_INIT)
    flag.remove(FIGHT_CLOSE)
    assert flag.value == SES_INIT
from umdp.checksum import checksum


def test_empty_payload():
    assert checksum("") == "0000"


def test_sum_of_code_points():
    assert checksum("A") == "0041"
    assert checksum("AB") == "0083"


def test_lowercase_and_padded():
    assert checksum("ÿ") == "00ff"
    assert len(checksum("x" * 1000)) == 4


def test_wraps_modulo_65536():
    assert checksum("\uffff\u0002") == "0001"


def test_deterministic():
    payload = "AAwADA=="
    assert checksum(payload) == checksum(payload)


def test_detects_single_value_change():
    assert checksum("AAwADA==") != checksum("BAwADA==")


def test_blind_to_transposition():
    # Additive sums commute; reordering is not detected.
    assert checksum("AB") == checksum("BA")

def test_margin_boundaries():
    def is_negative(available):
        return available < -0.01
    assert is_negative(-10.00) is True
    assert is_negative(-0.02) is True
    assert is_negative(-0.01) is False
    assert is_negative(0.00) is False

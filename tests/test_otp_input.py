from use_cases.otp_input import OtpInput


def test_paste_strips_non_digits_and_caps_at_six():
    otp = OtpInput()
    otp.paste("12a3456789")

    assert otp.cells == ["1", "2", "3", "4", "5", "6"]
    assert otp.focus == 5
    assert otp.is_complete() is True
    assert otp.joined() == "123456"


def test_short_paste_leaves_remaining_cells_untouched():
    otp = OtpInput()
    for i, d in enumerate("987654"):
        otp.set_digit(i, d)

    otp.paste("1-2")

    assert otp.cells == ["1", "2", "7", "6", "5", "4"]
    assert otp.focus == 1


def test_paste_without_digits_changes_nothing():
    otp = OtpInput()
    otp.set_digit(0, "4")
    otp.paste("abc")

    assert otp.cells[0] == "4"
    assert otp.focus == 1


def test_typing_moves_focus_forward():
    otp = OtpInput()
    otp.set_digit(2, "7")

    assert otp.cells[2] == "7"
    assert otp.focus == 3


def test_typing_in_last_cell_keeps_focus():
    otp = OtpInput()
    otp.focus = 5
    otp.set_digit(5, "7")

    assert otp.cells[5] == "7"
    assert otp.focus == 5


def test_multi_character_input_keeps_first_digit():
    otp = OtpInput()
    otp.set_digit(0, "x93")

    assert otp.cells[0] == "9"


def test_non_digit_input_clears_cell_without_moving_focus():
    otp = OtpInput()
    otp.set_digit(1, "5")
    otp.focus = 1
    otp.set_digit(1, "a")

    assert otp.cells[1] == ""
    assert otp.focus == 1


def test_backspace_on_empty_cell_moves_back():
    otp = OtpInput()
    otp.focus = 3
    otp.handle_backspace(3)
    assert otp.focus == 2


def test_backspace_on_filled_cell_stays():
    otp = OtpInput()
    otp.set_digit(3, "1")
    otp.focus = 3
    otp.handle_backspace(3)

    assert otp.focus == 3
    assert otp.cells[3] == "1"


def test_backspace_on_first_cell_stays():
    otp = OtpInput()
    otp.handle_backspace(0)
    assert otp.focus == 0


def test_partial_code_is_not_complete():
    otp = OtpInput()
    otp.paste("123")

    assert otp.is_complete() is False
    assert otp.joined() == "123"


def test_reset_empties_cells():
    otp = OtpInput()
    otp.paste("123456")
    otp.reset()

    assert otp.cells == [""] * 6
    assert otp.focus == 0

from bookshop.activation.single_instance import decode_arguments, encode_arguments


def test_valid_message_yields_argv():
    assert decode_arguments(encode_arguments(["bookshop", "--page", "Orders"])) == ["bookshop", "--page", "Orders"]


def test_malformed_messages_are_ignored():
    assert decode_arguments(b"") is None
    assert decode_arguments(b"\xff\xfe") is None
    assert decode_arguments(b'["bookshop"]') is None
    assert decode_arguments(b'{"argv": [1, 2]}') is None

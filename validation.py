text_max_length: dict[str, int] = {
    'tinytext': 255,
    'text': 65535
}

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def is_valid_png(data: bytes) -> bool:
    """Check the 8 byte PNG magic, the only image type check we trust."""
    return len(data) >= len(PNG_SIGNATURE) and data[:len(PNG_SIGNATURE)] == PNG_SIGNATURE

"""String literal processing utilities for the AST builder."""
from __future__ import annotations


def process_string_escapes(raw_string: str) -> str:
    r"""Process escape sequences in a Rust string literal body.

    Handles the escapes Rust accepts in string literals:
    - \n (newline), \t (tab), \r (carriage return)
    - \\ (backslash), \" (double quote), \' (single quote)
    - \0 (null character)
    - \xNN (hexadecimal escape, e.g., \x41 = 'A')
    - \u{N..} (Unicode escape, e.g., \u{41} = 'A')
    - backslash-newline (line continuation, skips leading whitespace)

    Args:
        raw_string: The literal body without its quotes

    Returns:
        The processed string with escape sequences converted to actual characters
    """
    simple_escapes = {
        'n': '\n',
        't': '\t',
        'r': '\r',
        '\\': '\\',
        '"': '"',
        "'": "'",
        '0': '\0',
    }

    result = []
    i = 0
    while i < len(raw_string):
        if raw_string[i] == '\\' and i + 1 < len(raw_string):
            next_char = raw_string[i + 1]

            if next_char in simple_escapes:
                result.append(simple_escapes[next_char])
                i += 2
            elif next_char == 'x' and i + 3 < len(raw_string):
                try:
                    result.append(chr(int(raw_string[i + 2:i + 4], 16)))
                    i += 4
                except ValueError:
                    result.append(raw_string[i])
                    i += 1
            elif next_char == 'u' and raw_string.startswith('{', i + 2):
                close = raw_string.find('}', i + 3)
                digits = raw_string[i + 3:close] if close != -1 else ""
                try:
                    # Rust takes 1 to 6 hex digits; anything else stays literal
                    if not 1 <= len(digits) <= 6:
                        raise ValueError(digits)
                    result.append(chr(int(digits, 16)))
                    i = close + 1
                except (ValueError, OverflowError):
                    result.append(raw_string[i])
                    i += 1
            elif next_char == '\n':
                i += 2
                while i < len(raw_string) and raw_string[i] in ' \t\r\n':
                    i += 1
            else:
                result.append(raw_string[i])
                i += 1
        else:
            result.append(raw_string[i])
            i += 1

    return ''.join(result)


def parse_string_token(token_value: str) -> str:
    """Value of a STRING or RAW_STRING token: r#"..."# bodies are taken as-is."""
    if token_value.startswith('r'):
        hashes = len(token_value) - len(token_value[1:].lstrip('#')) - 1
        return token_value[2 + hashes:len(token_value) - 1 - hashes]
    return process_string_escapes(token_value[1:-1])

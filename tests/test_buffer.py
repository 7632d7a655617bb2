"""Tests for the host text buffer, token helpers and proxy handle."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from dkeys.buffer import TextBuffer, is_separator, trailing_token, last_token_start
from dkeys.proxy import ProxyHandle


def test_insert_and_delete():
    buf = TextBuffer()
    buf.insert_text('hello')
    buf.delete_backward()
    assert buf.document_context_before_input == 'hell'
    assert buf.cursor == 4


def test_delete_at_start_is_noop():
    buf = TextBuffer('', 'tail')
    buf.delete_backward()
    assert buf.text == 'tail'
    assert buf.cursor == 0


def test_edits_never_touch_text_after_cursor():
    buf = TextBuffer('abc', 'def')
    buf.delete_backward()
    buf.insert_text('X')
    assert buf.document_context_before_input == 'abX'
    assert buf.document_context_after_input == 'def'


def test_separators():
    assert is_separator(' ')
    assert is_separator('\n')
    assert is_separator(',')
    assert is_separator('—')
    assert not is_separator('a')
    assert not is_separator('é')


def test_trailing_token():
    assert trailing_token('I want to wri') == 'wri'
    assert trailing_token('hello') == 'hello'
    assert trailing_token('hello ') == ''
    assert trailing_token('end.') == ''
    assert trailing_token('') == ''
    assert trailing_token('(paren') == 'paren'


def test_last_token_start_skips_trailing_separators():
    assert last_token_start("hello world, ") == 6
    assert last_token_start("hello") == 0
    assert last_token_start("   ") == 3
    assert last_token_start("") == 0


def test_proxy_handle_forwards_edits():
    buf = TextBuffer('ab', 'cd')
    handle = ProxyHandle(buf)
    handle.delete_backward(2)
    handle.insert_text('xy')
    assert handle.text_before_cursor() == 'xy'
    assert handle.text_after_cursor() == 'cd'


def test_proxy_handle_tolerates_missing_host():
    buf = TextBuffer('abc')
    handle = ProxyHandle(buf)
    assert handle.available
    del buf
    assert not handle.available
    handle.insert_text('ignored')
    handle.delete_backward(3)
    assert handle.text_before_cursor() == ''
    assert handle.text_after_cursor() == ''


def test_proxy_handle_none_context():
    class Host:
        document_context_before_input = None
        document_context_after_input = None

    host = Host()
    handle = ProxyHandle(host)
    assert handle.text_before_cursor() == ''
    assert handle.text_after_cursor() == ''


if __name__ == '__main__':
    test_insert_and_delete()
    test_delete_at_start_is_noop()
    test_edits_never_touch_text_after_cursor()
    test_separators()
    test_trailing_token()
    test_last_token_start_skips_trailing_separators()
    test_proxy_handle_forwards_edits()
    test_proxy_handle_tolerates_missing_host()
    test_proxy_handle_none_context()
    print("All buffer tests passed.")

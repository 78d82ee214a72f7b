from corpcov.preprocess import clean_text, has_repeated_letter, strip_symbols, strip_urls, transliterate


def test_url_and_punctuation_removed():
    assert clean_text('Check http://x.co NOW!!') == 'Check NOW'


def test_empty_and_malformed_input():
    assert clean_text('') == ''
    assert clean_text('   \t ') == ''
    assert clean_text(None) == ''
    assert clean_text(float('nan')) == ''


def test_symbols_and_digits_dropped():
    assert strip_symbols("It's 5 o'clock") == 'Its  oclock'
    assert clean_text("It's 5 o'clock") == 'Its oclock'


def test_url_words_removed_whole():
    assert strip_urls('see httpsabc now') == 'see now'
    assert clean_text('go https://a.b/c?q=1 now') == 'go now'


def test_any_double_letter_removes_the_word():
    assert clean_text('a good book is sooo fun') == 'a is fun'
    # ordinary words with a double letter go too
    assert clean_text('all letters') == ''
    assert has_repeated_letter('hello')
    assert not has_repeated_letter('hahaha')


def test_transliteration():
    assert transliterate('café') == 'cafe'
    assert clean_text('café naïve') == 'cafe naive'
    assert clean_text('東京 tokyo') == 'tokyo'


def test_transliteration_cannot_bring_back_doubles():
    # ß spells "ss", a + ä fold to "aa"
    assert clean_text('die straße') == 'die'
    assert clean_text('aä x') == 'x'
    assert clean_text('ﬀ ok') == 'ok'


def test_idempotent():
    samples = [
        'Check http://x.co NOW!!',
        'The quick brown fox, jumps over 12 lazy dogs.',
        'café naïve ＨＴＴＰ ｈttps déjà vu',
        'a東a bæc tokyo 東京',
        '\x00 weird line\ttabs   spaces ',
        "don't stop-me now #hashtag @user",
    ]
    for s in samples:
        once = clean_text(s)
        assert clean_text(once) == once


if __name__ == '__main__':
    test_url_and_punctuation_removed()
    test_idempotent()
    print('preprocess tests passed')

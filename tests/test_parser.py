"""Tests for propsmap.parser."""
import logging

import pytest

import propsmap.parser as parser_mod
from propsmap import (
    InvalidPropertiesLine,
    PropertiesMap,
    PropertiesParser,
    current_os_suffix,
    load,
    load_from_bytes,
    load_from_lines,
    safe_load,
)

YUN = [
    'yun.vid.0=0x2341',
    'yun.pid.0=0x0041',
    'yun.vid.1=0x2341',
    'yun.pid.1=0x8041',
    'yun.upload.tool=avrdude',
    'yun.upload.protocol=avr109',
    'yun.upload.maximum_size=28672',
    'yun.upload.speed=57600',
]


class TestLoadFromLines:
    def test_load(self) -> None:
        m = load_from_lines(YUN)
        assert m.get('yun.upload.speed') == '57600'
        assert m.keys() == [i.split('=')[0] for i in YUN]

    def test_blank_and_comment_lines(self) -> None:
        m = load_from_lines(['', '   ', '# a=b', '  # c', ' k = v = w '])
        assert m.as_dict() == {'k': 'v = w'}

    def test_malformed_line(self) -> None:
        with pytest.raises(InvalidPropertiesLine) as exc:
            load_from_lines(['yun.vid.0=0x2341', 'yun.pid.1', 'a=b'])
        assert exc.value.index == 1
        assert exc.value.line == 'yun.pid.1'

    def test_later_duplicates_win_and_move(self) -> None:
        m = load_from_lines(['a=1', 'b=2', 'a=3'])
        assert m.keys() == ['b', 'a']
        assert m.get('a') == '3'

    def test_empty_key_or_value(self) -> None:
        m = load_from_lines(['=v', 'k='])
        assert m.get_ok('') == ('v', True)
        assert m.get_ok('k') == ('', True)


class TestOsSuffix:
    LINES = [
        'which.os=is unknown',
        'which.os.linux=is linux',
        'which.os.windows=is windows',
        'which.os.macosx=is macosx',
    ]

    @pytest.mark.parametrize('suffix', ['linux', 'windows', 'macosx'])
    def test_explicit_suffix(self, suffix: str) -> None:
        m = load_from_lines(self.LINES, os_suffix=suffix)
        assert m.get('which.os') == f'is {suffix}'
        assert not m.contains_key(f'which.os.{suffix}')

    def test_default_suffix(self) -> None:
        m = load_from_lines(self.LINES)
        if current_os_suffix() in ('linux', 'windows', 'macosx'):
            assert m.get('which.os') == f'is {current_os_suffix()}'
        else:
            assert m.get('which.os') == 'is unknown'

    def test_empty_suffix_keeps_keys(self) -> None:
        m = load_from_lines(self.LINES, os_suffix='')
        assert m.size() == 4

    def test_current_os_suffix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for platform, expected in [('darwin', 'macosx'), ('win32', 'windows'),
                                   ('linux', 'linux'), ('freebsd14', 'freebsd14')]:
            monkeypatch.setattr(parser_mod.sys, 'platform', platform)
            assert current_os_suffix() == expected


class TestLoadFromBytes:
    def test_newlines(self) -> None:
        m = load_from_bytes(b'a=1\r\nb=2\rc=3\n')
        assert m.as_dict() == {'a': '1', 'b': '2', 'c': '3'}

    def test_malformed(self) -> None:
        with pytest.raises(InvalidPropertiesLine) as exc:
            load_from_bytes(b'\nyun.vid.0=0x2341\nyun.pid.1\nyun.upload.tool=avrdude\n')
        assert exc.value.index == 2

    def test_utf8(self) -> None:
        m = load_from_bytes('maintainer=Aáa'.encode('utf-8'))
        assert m.get('maintainer') == 'Aáa'

    def test_latin1_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(parser_mod.chardet, 'detect', lambda raw: {
            'encoding': 'EUC-KR', 'confidence': 0.3, 'language': ''})
        m = load_from_bytes(b'maintainer=A\xe1a')
        assert m.get('maintainer') == 'Aáa'

    def test_guessed_encoding(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(parser_mod.chardet, 'detect', lambda raw: {
            'encoding': 'GB2312', 'confidence': 0.99, 'language': 'Chinese'})
        m = load_from_bytes('name=中文'.encode('gb2312'))
        assert m.get('name') == '中文'

    def test_bad_guess_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(parser_mod.chardet, 'detect', lambda raw: {
            'encoding': 'ascii', 'confidence': 1.0, 'language': ''})
        m = load_from_bytes(b'maintainer=A\xe1a')
        assert m.get('maintainer') == 'Aáa'


class TestFiles:
    def test_boards_txt(self, testdata) -> None:
        p = load(str(testdata / 'boards.txt'))
        assert p.size() == 23
        assert p.get('menu.cpu') == 'Processor'
        assert p.get('ethernet.upload.maximum_size') == '32256'
        assert p.get('robotMotor.build.extra_flags') == '{build.usb_flags}'
        assert p.sub_tree('ethernet').get('name') == 'Arduino Ethernet'

        robot = p.sub_tree('robotMotor')
        assert robot.expand_props_in_string(
            robot.get('build.extra_flags')
        ) == '-DUSB_VID=0x2341 -DUSB_PID=0x8039'
        assert p.extract_sub_index_lists('robotMotor.vid') == [
            '0x2341', '0x2341']

    def test_test_txt(self, testdata) -> None:
        p = load(str(testdata / 'test.txt'), os_suffix='linux')
        assert p.get('key') == 'value = 1'
        assert p.get('which.os') == 'is linux'

    def test_broken(self, testdata) -> None:
        with pytest.raises(InvalidPropertiesLine) as exc:
            load(str(testdata / 'broken.txt'))
        assert exc.value.index == 1

    def test_non_utf8(self, testdata, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(parser_mod.chardet, 'detect', lambda raw: {
            'encoding': None, 'confidence': 0.0, 'language': None})
        p = load(str(testdata / 'non-utf8.properties'))
        assert p.get('maintainer') == 'Aáa'
        assert p.get('sentence') == 'Bibliothèque pour la série'

    def test_explicit_encoding(self, testdata) -> None:
        p = PropertiesParser(
            str(testdata / 'non-utf8.properties'), 'cp1252').read()
        assert p.get('maintainer') == 'Aáa'
        assert p.size() == 3

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(OSError):
            load(str(tmp_path / 'nope.txt'))

    def test_safe_load(self, tmp_path, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger='propsmap.parser'):
            m = safe_load(str(tmp_path / 'nope.txt'))
        assert m.size() == 0
        assert 'nope.txt' in caplog.text

        (tmp_path / 'yes.txt').write_text('a=1\n', encoding='utf-8')
        assert safe_load(str(tmp_path / 'yes.txt')).get('a') == '1'

    def test_write_then_read(self, tmp_path) -> None:
        m = PropertiesMap()
        m.set('key1', 'value1')
        m.set('key2', 'value2=somethingElse')
        m.set('name', 'Über')
        fn = str(tmp_path / 'out.txt')
        handler = PropertiesParser(fn, os_suffix='linux')
        handler.write(m)
        assert handler.read().equals_with_order(m)
        assert handler.os_suffix == 'linux'
        assert fn in str(handler)

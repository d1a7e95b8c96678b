#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit Tests for the XLIFF parser (1.2 and 2.x)
"""

import pytest

from mqm.exceptions import MalformedFileError
from mqm.file_parsers import XLIFFParser


class TestXLIFF12:
    def test_namespaced_document(self, sample_xliff):
        pairs = XLIFFParser().parse(sample_xliff)

        assert [pair.id for pair in pairs] == [1, 2]
        assert pairs[0].source == "Good morning."
        assert pairs[0].target == "Guten Morgen."
        assert pairs[0].source_lang == "en"
        assert pairs[0].target_lang == "de"

    def test_missing_target_is_empty(self, sample_xliff):
        pairs = XLIFFParser().parse(sample_xliff)
        assert pairs[1].source == "See you tomorrow."
        assert pairs[1].target == ""
        assert pairs[1].is_monolingual

    def test_without_namespace(self):
        data = b"""<xliff version="1.2"><file source-language="en" target-language="es">
            <body><trans-unit id="1"><source>Yes</source><target>S\xc3\xad</target></trans-unit></body>
        </file></xliff>"""
        pairs = XLIFFParser().parse(data)
        assert pairs[0].target == "Sí"
        assert pairs[0].target_lang == "es"

    def test_ids_sequential_across_files(self):
        data = b"""<xliff version="1.2">
          <file source-language="en" target-language="fr"><body>
            <trans-unit id="a"><source>One</source><target>Un</target></trans-unit>
            <trans-unit id="b"><source>  </source><target>Vide</target></trans-unit>
          </body></file>
          <file source-language="en" target-language="it"><body>
            <group><trans-unit id="c"><source>Two</source><target>Due</target></trans-unit></group>
          </body></file>
        </xliff>"""
        pairs = XLIFFParser().parse(data)

        assert [pair.id for pair in pairs] == [1, 2]
        assert pairs[1].source == "Two"
        assert pairs[1].target_lang == "it"

    def test_inline_tags_text_kept(self):
        data = b"""<xliff version="1.2"><file source-language="en" target-language="fr"><body>
            <trans-unit id="1"><source>Press <g id="1">Enter</g> key</source>
            <target>Appuyez sur <g id="1">Entr\xc3\xa9e</g></target></trans-unit>
        </body></file></xliff>"""
        pair = XLIFFParser().parse(data)[0]
        assert pair.source == "Press Enter key"
        assert pair.target == "Appuyez sur Entrée"

    def test_seg_source_not_mistaken_for_source(self):
        data = b"""<xliff version="1.2"><file source-language="en" target-language="fr"><body>
            <trans-unit id="1"><source>Full text</source>
              <seg-source><mrk mtype="seg" mid="1">Full text</mrk></seg-source>
              <target>Texte complet</target></trans-unit>
        </body></file></xliff>"""
        pairs = XLIFFParser().parse(data)
        assert len(pairs) == 1
        assert pairs[0].source == "Full text"


class TestXLIFF2:
    def test_root_languages(self, sample_xliff2):
        pairs = XLIFFParser().parse(sample_xliff2)

        assert len(pairs) == 2
        assert pairs[0].source == "Thank you."
        assert pairs[0].target == "ありがとうございます。"
        assert (pairs[0].source_lang, pairs[0].target_lang) == ("en", "ja")

    def test_multiple_segments_per_unit(self):
        data = """<xliff xmlns="urn:oasis:names:tc:xliff:document:2.0" version="2.0" srcLang="en" trgLang="fr">
          <file id="f"><unit id="u">
            <segment><source>A.</source><target>A.</target></segment>
            <ignorable><source> </source></ignorable>
            <segment><source>B.</source></segment>
          </unit></file></xliff>""".encode("utf-8")
        pairs = XLIFFParser().parse(data)
        assert [(pair.source, pair.target) for pair in pairs] == [("A.", "A."), ("B.", "")]


class TestMalformedXLIFF:
    def test_no_file_element(self):
        with pytest.raises(MalformedFileError) as exc_info:
            XLIFFParser().parse(b'<xliff version="1.2"></xliff>')
        assert "XLIFF" in str(exc_info.value)

    def test_not_xml(self):
        with pytest.raises(MalformedFileError):
            XLIFFParser().parse(b"plain text, not xml")

    def test_empty(self):
        with pytest.raises(MalformedFileError):
            XLIFFParser().parse(b"")

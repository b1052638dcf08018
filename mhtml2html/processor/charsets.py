"""Charset label registry for decoding archived text."""

import codecs
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from mhtml2html.utils.logging import logger

DEFAULT_CHARSET = "UTF-8"


@dataclass(frozen=True)
class CharsetDecoder:
    """Byte-to-text decoder for one canonical encoding.

    Decoding never fails: undecodable bytes become U+FFFD.
    """

    name: str  # Canonical WHATWG name, e.g. "windows-1252"
    codec: str  # Python codec implementing it

    def decode(self, data: bytes) -> str:
        """Decode bytes to text, replacing invalid sequences."""
        return data.decode(self.codec, errors="replace")


# Canonical decoder -> (Python codec, labels resolving to it).
# Labels follow the WHATWG Encoding Standard; lookups are case-insensitive.
_CHARSET_TABLE: dict[str, tuple[str, tuple[str, ...]]] = {
    "utf-8": ("utf-8", ("UTF-8", "UTF8", "UNICODE-1-1-UTF-8")),
    "ibm866": ("cp866", ("IBM866", "866", "CP866", "CSIBM866")),
    "iso-8859-2": ("iso8859_2", (
        "ISO-8859-2", "CSISOLATIN2", "ISO-IR-101", "ISO8859-2", "ISO88592",
        "ISO_8859-2", "ISO_8859-2:1987", "L2", "LATIN2",
    )),
    "iso-8859-3": ("iso8859_3", (
        "ISO-8859-3", "CSISOLATIN3", "ISO-IR-109", "ISO8859-3", "ISO88593",
        "ISO_8859-3", "ISO_8859-3:1988", "L3", "LATIN3",
    )),
    "iso-8859-4": ("iso8859_4", (
        "ISO-8859-4", "CSISOLATIN4", "ISO-IR-110", "ISO8859-4", "ISO88594",
        "ISO_8859-4", "ISO_8859-4:1988", "L4", "LATIN4",
    )),
    "iso-8859-5": ("iso8859_5", (
        "ISO-8859-5", "CSISOLATINCYRILLIC", "CYRILLIC", "ISO-IR-144",
        "ISO8859-5", "ISO88595", "ISO_8859-5", "ISO_8859-5:1988",
    )),
    "iso-8859-6": ("iso8859_6", (
        "ISO-8859-6", "ARABIC", "ASMO-708", "CSISO88596E", "CSISO88596I",
        "CSISOLATINARABIC", "ECMA-114", "ISO-8859-6-E", "ISO-8859-6-I",
        "ISO-IR-127", "ISO8859-6", "ISO88596", "ISO_8859-6", "ISO_8859-6:1987",
    )),
    "iso-8859-7": ("iso8859_7", (
        "ISO-8859-7", "CSISOLATINGREEK", "ECMA-118", "ELOT_928", "GREEK",
        "GREEK8", "ISO-IR-126", "ISO8859-7", "ISO88597", "ISO_8859-7",
        "ISO_8859-7:1987", "SUN_EU_GREEK",
    )),
    "iso-8859-8": ("iso8859_8", (
        "ISO-8859-8", "CSISO88598E", "CSISOLATINHEBREW", "HEBREW",
        "ISO-8859-8-E", "ISO-IR-138", "ISO8859-8", "ISO88598", "ISO_8859-8",
        "ISO_8859-8:1988", "VISUAL",
    )),
    # Same byte mapping as iso-8859-8; differs only in text directionality.
    "iso-8859-8-i": ("iso8859_8", ("ISO-8859-8-I", "CSISO88598I", "LOGICAL")),
    "iso-8859-10": ("iso8859_10", (
        "ISO-8859-10", "CSISOLATIN6", "ISO-IR-157", "ISO8859-10", "ISO885910",
        "L6", "LATIN6",
    )),
    "iso-8859-13": ("iso8859_13", ("ISO-8859-13", "ISO8859-13", "ISO885913")),
    "iso-8859-14": ("iso8859_14", ("ISO-8859-14", "ISO8859-14", "ISO885914")),
    "iso-8859-15": ("iso8859_15", (
        "ISO-8859-15", "CSISOLATIN9", "ISO8859-15", "ISO885915", "ISO_8859-15",
        "L9",
    )),
    "koi8-r": ("koi8_r", ("KOI8-R", "CSKOI8R", "KOI", "KOI8", "KOI8_R")),
    "koi8-u": ("koi8_u", ("KOI8-U", "KOI8-RU")),
    "macintosh": ("mac_roman", ("MACINTOSH", "CSMACINTOSH", "MAC", "X-MAC-ROMAN")),
    "windows-874": ("cp874", (
        "WINDOWS-874", "DOS-874", "ISO-8859-11", "ISO8859-11", "ISO885911",
        "TIS-620",
    )),
    "windows-1250": ("cp1250", ("WINDOWS-1250", "CP1250", "X-CP1250")),
    "windows-1251": ("cp1251", ("WINDOWS-1251", "CP1251", "X-CP1251")),
    "windows-1252": ("cp1252", (
        "WINDOWS-1252", "ANSI_X3.4-1968", "ASCII", "CP1252", "CP819",
        "CSISOLATIN1", "IBM819", "ISO-8859-1", "ISO-IR-100", "ISO8859-1",
        "ISO88591", "ISO_8859-1", "ISO_8859-1:1987", "L1", "LATIN1",
        "US-ASCII", "X-CP1252",
    )),
    "windows-1253": ("cp1253", ("WINDOWS-1253", "CP1253", "X-CP1253")),
    "windows-1254": ("cp1254", (
        "WINDOWS-1254", "CP1254", "CSISOLATIN5", "ISO-8859-9", "ISO-IR-148",
        "ISO8859-9", "ISO88599", "ISO_8859-9", "ISO_8859-9:1989", "L5",
        "LATIN5", "X-CP1254",
    )),
    "windows-1255": ("cp1255", ("WINDOWS-1255", "CP1255", "X-CP1255")),
    "windows-1256": ("cp1256", ("WINDOWS-1256", "CP1256", "X-CP1256")),
    "windows-1257": ("cp1257", ("WINDOWS-1257", "CP1257", "X-CP1257")),
    "windows-1258": ("cp1258", ("WINDOWS-1258", "CP1258", "X-CP1258")),
    "x-mac-cyrillic": ("mac_cyrillic", ("X-MAC-CYRILLIC", "X-MAC-UKRAINIAN")),
    "gbk": ("gbk", (
        "GBK", "CHINESE", "CSGB2312", "CSISO58GB231280", "GB2312", "GB_2312",
        "GB_2312-80", "ISO-IR-58", "X-GBK",
    )),
    "gb18030": ("gb18030", ("GB18030",)),
    "big5": ("big5hkscs", ("BIG5", "BIG5-HKSCS", "CN-BIG5", "CSBIG5", "X-X-BIG5")),
    "euc-jp": ("euc_jp", ("EUC-JP", "CSEUCPKDFMTJAPANESE", "X-EUC-JP")),
    "iso-2022-jp": ("iso2022_jp", ("ISO-2022-JP", "CSISO2022JP")),
    "shift_jis": ("cp932", (
        "SHIFT_JIS", "CSSHIFTJIS", "MS932", "MS_KANJI", "SHIFT-JIS", "SJIS",
        "WINDOWS-31J", "X-SJIS",
    )),
    "euc-kr": ("cp949", (
        "EUC-KR", "CSEUCKR", "CSKSC56011987", "ISO-IR-149", "KOREAN",
        "KS_C_5601-1987", "KS_C_5601-1989", "KSC5601", "KSC_5601", "WINDOWS-949",
    )),
}


class CharsetRegistry:
    """Read-only mapping of charset labels to canonical decoders.

    Built once and never mutated afterwards, so a single instance can be
    shared by any number of concurrent conversions.
    """

    def __init__(self, table: Mapping[str, tuple[str, tuple[str, ...]]]) -> None:
        """Build registry from a canonical-name table.

        Args:
            table: Canonical name -> (Python codec, labels).
        """
        labels: dict[str, CharsetDecoder] = {}
        for name, (codec, aliases) in table.items():
            codecs.lookup(codec)  # Fail at import time on a bad table entry
            decoder = CharsetDecoder(name=name, codec=codec)
            labels[name.upper()] = decoder
            for alias in aliases:
                labels.setdefault(alias.upper(), decoder)
        self._labels = MappingProxyType(labels)
        self._fallback = labels[DEFAULT_CHARSET]

    @property
    def labels(self) -> Mapping[str, CharsetDecoder]:
        """All known labels (upper-case) and their decoders."""
        return self._labels

    @property
    def canonical_names(self) -> list[str]:
        """Distinct canonical decoder names."""
        return sorted({d.name for d in self._labels.values()})

    def lookup(self, label: str | None) -> CharsetDecoder | None:
        """Find decoder for a label without falling back.

        Args:
            label: Charset label as declared, any case.

        Returns:
            Matching decoder or None.
        """
        if not label:
            return None
        return self._labels.get(label.strip().strip("\"'").upper())

    def get_decoder(self, label: str | None) -> CharsetDecoder:
        """Find decoder for a label, falling back to UTF-8.

        Args:
            label: Charset label as declared, any case.

        Returns:
            Matching decoder, or the UTF-8 decoder for unknown labels.
        """
        decoder = self.lookup(label)
        if decoder is None:
            if label:
                logger.warning(f"Unknown charset '{label}', decoding as UTF-8")
            return self._fallback
        return decoder

    def is_known(self, label: str | None) -> bool:
        """Check if a label resolves to a decoder."""
        return self.lookup(label) is not None

    def decode(self, data: bytes, label: str | None) -> str:
        """Decode bytes with the decoder registered for label."""
        return self.get_decoder(label).decode(data)

    def __contains__(self, label: object) -> bool:
        return isinstance(label, str) and self.is_known(label)

    def __len__(self) -> int:
        return len(self._labels)


CHARSETS = CharsetRegistry(_CHARSET_TABLE)

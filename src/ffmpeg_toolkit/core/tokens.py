"""Typed command-line fragments for building ffmpeg argv lists."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .paths import bundle_path, document_path

if TYPE_CHECKING:
    from .paths import PathRoots


@dataclass(frozen=True)
class ArgumentToken:
    """
    One immutable command-line fragment: a flag, a literal value or a path.

    Tokens carry no validation. Durations, sizes and bitrates are plain
    literals, and the caller is responsible for an order ffmpeg accepts.
    """

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_literal(cls, text: str) -> ArgumentToken:
        """Wrap text verbatim. Any string, including an empty one, is accepted."""
        return cls(text)

    @classmethod
    def from_constant(cls, arg: FFmpegArg) -> ArgumentToken:
        """Token for a catalogue constant."""
        return cls(arg.value)

    @classmethod
    def from_bundle_path(cls, file_name: str, roots: PathRoots | None = None) -> ArgumentToken:
        """
        Token for file_name inside the bundle (read-only resource) root.

        Raises:
            PathResolutionError: If the bundle root cannot be resolved

        """
        return cls(bundle_path(file_name, roots))

    @classmethod
    def from_document_path(cls, file_name: str, roots: PathRoots | None = None) -> ArgumentToken:
        """
        Token for file_name inside the user document root.

        Raises:
            PathResolutionError: If the document root cannot be resolved

        """
        return cls(document_path(file_name, roots))


class FFmpegArg(Enum):
    """Catalogue of well-known ffmpeg literals and flags (alphabetical per group)."""

    # Tool, codecs and formats
    AAC = "aac"
    COPY = "copy"
    FFMPEG = "ffmpeg"
    GIF = "gif"
    HLS = "hls"
    M4V = "m4v"
    MP3 = "mp3"
    MP4V = "mp4v"
    MPEG4 = "mpeg4"

    # Flags
    AB = "-ab"
    AC = "-ac"
    ACODEC = "-acodec"
    AF = "-af"
    AN = "-an"
    AR = "-ar"
    ASPECT = "-aspect"
    AUTHOR = "-author"
    B = "-b"
    BF = "-bf"
    BT = "-bt"
    CROPTOP = "-croptop"
    CROPBOTTOM = "-cropbottom"
    CROPLEFT = "-cropleft"
    CROPRIGHT = "-cropright"
    DEINTERLACE = "-deinterlace"
    F = "-f"
    G = "-g"
    HQ = "-hq"
    I = "-i"  # noqa: E741
    INTERLACE = "-interlace"
    INTRA = "-intra"
    ITSOFFSET = "-itsoffset"
    PADTOP = "-padtop"
    PADBOTTOM = "-padbottom"
    PADLEFT = "-padleft"
    PADRIGHT = "-padright"
    PADCOLOR = "-padcolor"
    PART = "-part"
    PASS = "-pass"
    PS = "-ps"
    QBLUR = "-qblur"
    QMAX = "-qmax"
    QMIN = "-qmin"
    QSCALE = "-qscale"
    R = "-r"
    S = "-s"
    SS = "-ss"
    STRICT = "-strict"
    T = "-t"
    TARGET = "-target"
    TITLE = "-title"
    VC = "-vc"
    VCODEC = "-vcodec"
    VD = "-vd"
    VF = "-vf"
    VN = "-vn"
    Y = "-y"

    @property
    def token(self) -> ArgumentToken:
        """The constant as an ArgumentToken."""
        return ArgumentToken.from_constant(self)

    @property
    def is_flag(self) -> bool:
        """True for dash-prefixed options, False for tool, codec and format names."""
        return self.value.startswith("-")

# -*- coding: utf-8 -*-
"""分析预设：常用的头影测量分析法。landmarks 的顺序即逐点标注的引导顺序。"""

from __future__ import annotations

from typing import Tuple

from .types import AnalysisPreset

DEFAULT_PRESET_ID = "QUICK"

ANALYSIS_PRESETS: Tuple[AnalysisPreset, ...] = (
    AnalysisPreset(
        id="STEINER",
        name="Steiner Analysis",
        description="Classic Steiner cephalometric analysis",
        measurements=("SNA", "SNB", "ANB", "U1_SN", "IMPA", "INTERINCISAL", "OVERJET", "OVERBITE"),
        landmarks=("S", "N", "A", "B", "U1E", "U1A", "L1E", "L1A", "Me", "Go"),
    ),
    AnalysisPreset(
        id="DOWNS",
        name="Downs' Analysis",
        description="Downs' analysis with Frankfort plane reference",
        measurements=("FMA", "Y_AXIS", "FACIAL_CONVEXITY", "ANB", "INTERINCISAL"),
        landmarks=("S", "N", "A", "B", "Po", "Or", "Me", "Go", "Gn", "U1E", "U1A", "L1E", "L1A"),
    ),
    AnalysisPreset(
        id="TWEED",
        name="Tweed Analysis",
        description="Tweed triangle analysis focusing on IMPA",
        measurements=("FMA", "IMPA", "INTERINCISAL"),
        landmarks=("Po", "Or", "Me", "Go", "L1E", "L1A", "U1E", "U1A"),
    ),
    AnalysisPreset(
        id="RICKETTS",
        name="Ricketts Analysis",
        description="Comprehensive Ricketts analysis with soft tissue",
        measurements=("SNA", "SNB", "ANB", "FMA", "E_LINE_UPPER", "E_LINE_LOWER", "NASOLABIAL"),
        landmarks=("S", "N", "A", "B", "Po", "Or", "Me", "Go", "Prn", "Sn", "Ls", "Li", "Pgs"),
    ),
    AnalysisPreset(
        id="QUICK",
        name="Quick Analysis",
        description="Basic skeletal and dental assessment",
        measurements=("SNA", "SNB", "ANB", "FMA"),
        landmarks=("S", "N", "A", "B", "Po", "Or", "Me", "Go"),
    ),
)

# -*- coding: utf-8 -*-
"""侧位片标准头影测量标志点（32 个）。"""

from __future__ import annotations

from typing import Dict, Tuple

from .types import Landmark, LandmarkCategory

_C = LandmarkCategory

CEPH_LANDMARKS: Tuple[Landmark, ...] = (
    # === 颅底 ===
    Landmark("S", "Sella", "S", "Center of sella turcica (pituitary fossa)", _C.CRANIAL_BASE, True),
    Landmark("N", "Nasion", "N", "Most anterior point of frontonasal suture", _C.CRANIAL_BASE, True),
    Landmark("Ba", "Basion", "Ba", "Most inferior point on anterior margin of foramen magnum", _C.CRANIAL_BASE, False),
    Landmark("Po", "Porion", "Po", "Superior point of external auditory meatus", _C.CRANIAL_BASE, True),
    Landmark("Or", "Orbitale", "Or", "Most inferior point of infraorbital margin", _C.CRANIAL_BASE, True),

    # === 上颌 ===
    Landmark("A", "Point A (Subspinale)", "A", "Deepest point on concavity of anterior maxilla", _C.MAXILLA, True),
    Landmark("ANS", "Anterior Nasal Spine", "ANS", "Tip of anterior nasal spine", _C.MAXILLA, True),
    Landmark("PNS", "Posterior Nasal Spine", "PNS", "Most posterior point of hard palate", _C.MAXILLA, True),
    Landmark("Pr", "Prosthion", "Pr", "Most inferior point on alveolar bone between upper central incisors", _C.MAXILLA, False),

    # === 下颌 ===
    Landmark("B", "Point B (Supramentale)", "B", "Deepest point on concavity of anterior mandible", _C.MANDIBLE, True),
    Landmark("Pog", "Pogonion", "Pog", "Most anterior point on chin", _C.MANDIBLE, True),
    Landmark("Gn", "Gnathion", "Gn", "Most anteroinferior point on chin", _C.MANDIBLE, True),
    Landmark("Me", "Menton", "Me", "Most inferior point on symphysis", _C.MANDIBLE, True),
    Landmark("Go", "Gonion", "Go", "Most posteroinferior point on angle of mandible", _C.MANDIBLE, True),
    Landmark("Co", "Condylion", "Co", "Most superior point of mandibular condyle", _C.MANDIBLE, True),
    Landmark("Ar", "Articulare", "Ar", "Intersection of basisphenoid and posterior border of condyle", _C.MANDIBLE, True),
    Landmark("Id", "Infradentale", "Id", "Most superior point on alveolar bone between lower central incisors", _C.MANDIBLE, False),
    Landmark("D", "Point D", "D", "Center of symphysis at midline", _C.MANDIBLE, False),

    # === 牙齿 ===
    Landmark("U1E", "Upper Incisor Edge", "U1E", "Incisal edge of most prominent upper central incisor", _C.DENTAL, True),
    Landmark("U1A", "Upper Incisor Apex", "U1A", "Root apex of upper central incisor", _C.DENTAL, True),
    Landmark("L1E", "Lower Incisor Edge", "L1E", "Incisal edge of most prominent lower central incisor", _C.DENTAL, True),
    Landmark("L1A", "Lower Incisor Apex", "L1A", "Root apex of lower central incisor", _C.DENTAL, True),
    Landmark("U6", "Upper First Molar", "U6", "Mesial cusp tip of upper first molar", _C.DENTAL, False),
    Landmark("L6", "Lower First Molar", "L6", "Mesial cusp tip of lower first molar", _C.DENTAL, False),

    # === 软组织 ===
    Landmark("G", "Glabella", "G", "Most prominent point on forehead", _C.SOFT_TISSUE, False),
    Landmark("Ns", "Soft Tissue Nasion", "Ns", "Deepest point on soft tissue bridge of nose", _C.SOFT_TISSUE, False),
    Landmark("Prn", "Pronasale", "Prn", "Most prominent point of nose tip", _C.SOFT_TISSUE, True),
    Landmark("Sn", "Subnasale", "Sn", "Junction of columella and upper lip", _C.SOFT_TISSUE, True),
    Landmark("Ls", "Labrale Superius", "Ls", "Most anterior point of upper lip", _C.SOFT_TISSUE, True),
    Landmark("Li", "Labrale Inferius", "Li", "Most anterior point of lower lip", _C.SOFT_TISSUE, True),
    Landmark("Pgs", "Soft Tissue Pogonion", "Pgs", "Most anterior point on soft tissue chin", _C.SOFT_TISSUE, True),
    Landmark("Mes", "Soft Tissue Menton", "Mes", "Most inferior point on soft tissue chin", _C.SOFT_TISSUE, False),
)

LANDMARK_CATEGORY_ORDER: Tuple[LandmarkCategory, ...] = (
    _C.CRANIAL_BASE,
    _C.MAXILLA,
    _C.MANDIBLE,
    _C.DENTAL,
    _C.SOFT_TISSUE,
)

LANDMARK_CATEGORY_LABELS: Dict[LandmarkCategory, str] = {
    _C.CRANIAL_BASE: "Cranial Base",
    _C.MAXILLA: "Maxilla",
    _C.MANDIBLE: "Mandible",
    _C.DENTAL: "Dental",
    _C.SOFT_TISSUE: "Soft Tissue",
}

# 画布上按类别着色
LANDMARK_COLORS: Dict[LandmarkCategory, str] = {
    _C.CRANIAL_BASE: "#3b82f6",
    _C.MAXILLA: "#ef4444",
    _C.MANDIBLE: "#22c55e",
    _C.DENTAL: "#f59e0b",
    _C.SOFT_TISSUE: "#a855f7",
}

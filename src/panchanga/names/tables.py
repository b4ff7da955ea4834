"""Built-in display names (IAST transliteration)."""

from __future__ import annotations

from typing import Dict

MASAS = (
    "Caitra", "Vaiśākha", "Jyeṣṭha", "Āṣāḍha", "Śrāvaṇa", "Bhādrapada",
    "Āśvina", "Kārtika", "Mārgaśīrṣa", "Puṣya", "Māgha", "Phālguṇa",
)

_TITHI_STEMS = (
    "Pratipadā", "Dvitīyā", "Tṛtīyā", "Caturthī", "Pañcamī", "Ṣaṣṭhī", "Saptamī",
    "Aṣṭamī", "Navamī", "Daśamī", "Ekādaśī", "Dvādaśī", "Trayodaśī", "Caturdaśī",
)

TITHIS = (
    tuple(f"Śukla {s}" for s in _TITHI_STEMS)
    + ("Pūrṇimā",)
    + tuple(f"Kṛṣṇa {s}" for s in _TITHI_STEMS)
    + ("Amāvāsyā",)
)

NAKSHATRAS = (
    "Aśvinī", "Bharaṇī", "Kṛttikā", "Rohiṇī", "Mṛgaśirā", "Ārdrā", "Punarvasu",
    "Puṣya", "Āśleṣā", "Maghā", "Pūrva Phalgunī", "Uttara Phalgunī", "Hasta",
    "Citrā", "Svātī", "Viśākhā", "Anurādhā", "Jyeṣṭhā", "Mūla", "Pūrva Āṣāḍhā",
    "Uttara Āṣāḍhā", "Śravaṇa", "Dhaniṣṭhā", "Śatabhiṣā", "Pūrva Bhādrapadā",
    "Uttara Bhādrapadā", "Revatī",
)

YOGAS = (
    "Viṣkambha", "Prīti", "Āyuṣmān", "Saubhāgya", "Śobhana", "Atigaṇḍa",
    "Sukarmā", "Dhṛti", "Śūla", "Gaṇḍa", "Vṛddhi", "Dhruva", "Vyāghāta",
    "Harṣaṇa", "Vajra", "Siddhi", "Vyatīpāta", "Varīyān", "Parigha", "Śiva",
    "Siddha", "Sādhya", "Śubha", "Śukla", "Brahma", "Indra", "Vaidhṛti",
)

# Karana 1 and 58..60 are fixed; 2..57 run through the movable seven eight times.
KARANA_FIXED_FIRST = "Kiṃstughna"
KARANA_MOVABLE = ("Bava", "Bālava", "Kaulava", "Taitila", "Gara", "Vaṇija", "Viṣṭi")
KARANA_FIXED_LAST = ("Śakuni", "Catuṣpada", "Nāga")

VARAS = (
    "Bhānuvāra", "Somavāra", "Maṅgalavāra", "Budhavāra",
    "Guruvāra", "Śukravāra", "Śanivāra",
)

RITUS = ("Vasanta", "Grīṣma", "Varṣā", "Śarad", "Hemanta", "Śiśira")

SAMVATSARAS = (
    "Prabhava", "Vibhava", "Śukla", "Pramoda", "Prajāpati", "Āṅgīrasa",
    "Śrīmukha", "Bhāva", "Yuvan", "Dhātṛ", "Īśvara", "Bahudhānya",
    "Pramāthin", "Vikrama", "Vṛṣa", "Citrabhānu", "Svabhānu", "Tāraṇa",
    "Pārthiva", "Vyaya", "Sarvajit", "Sarvadhārin", "Virodhin", "Vikṛti",
    "Khara", "Nandana", "Vijaya", "Jaya", "Manmatha", "Durmukha",
    "Hemalamba", "Vilamba", "Vikārin", "Śārvarī", "Plava", "Śubhakṛt",
    "Śobhakṛt", "Krodhin", "Viśvāvasu", "Parābhava", "Plavaṅga", "Kīlaka",
    "Saumya", "Sādhāraṇa", "Virodhakṛt", "Paridhāvin", "Pramādin", "Ānanda",
    "Rākṣasa", "Nala", "Piṅgala", "Kālayukta", "Siddhārthin", "Raudra",
    "Durmati", "Dundubhi", "Rudhirodgārin", "Raktākṣa", "Krodhana", "Akṣaya",
)


def karana_name(number: int) -> str:
    if number == 1:
        return KARANA_FIXED_FIRST
    if 2 <= number <= 57:
        return KARANA_MOVABLE[(number - 2) % 7]
    return KARANA_FIXED_LAST[number - 58]


def _one_based(names) -> Dict[int, str]:
    return {i + 1: n for i, n in enumerate(names)}


def default_tables() -> Dict[str, Dict[int, str]]:
    return {
        "masa": _one_based(MASAS),
        "tithi": _one_based(TITHIS),
        "nakshatra": _one_based(NAKSHATRAS),
        "yoga": _one_based(YOGAS),
        "karana": {n: karana_name(n) for n in range(1, 61)},
        "vara": {i: n for i, n in enumerate(VARAS)},   # 0 = Sunday
        "samvatsara": _one_based(SAMVATSARAS),
        "ritu": _one_based(RITUS),
    }

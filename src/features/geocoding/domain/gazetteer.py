"""Hulu Selangor の地名辞書（キーワード → 代表座標）"""
from dataclasses import dataclass


@dataclass(frozen=True)
class KnownPlace:
    """キーワードで照合する既知の地点"""

    lat: float
    lon: float
    keywords: tuple[str, ...]


@dataclass(frozen=True)
class MukimCentre:
    """mukimの中心座標と散布半径（度）"""

    lat: float
    lon: float
    radius: float


# daerah Hulu Selangor の中心（Kuala Kubu Bharu）
DISTRICT_NAME = "Hulu Selangor"
DISTRICT_CENTRE = (3.5667, 101.6500)
DISTRICT_RADIUS = 0.05

KNOWN_PLACES: dict[str, KnownPlace] = {
    # Kuala Kubu Bharu (44000)
    "kkb_town": KnownPlace(3.5667, 101.6500, ("kuala kubu bharu", "kkb", "pekan kkb", "bandar kkb", "44000", "kuartes ikbn peretak", "jalan ampang pecah")),
    "kkb_taman_melawati": KnownPlace(3.5680, 101.6510, ("taman melawati kuala kubu bharu", "taman melawati kkb", "tmn melawati")),
    "kkb_taman_kkb": KnownPlace(3.5660, 101.6490, ("taman kkb", "tmn kkb")),
    "kkb_hospital": KnownPlace(3.5700, 101.6450, ("hospital kuala kubu bharu", "hospital kkb")),
    "kkb_pejabat_daerah": KnownPlace(3.5680, 101.6520, ("pejabat daerah", "kompleks kerajaan")),
    "kkb_taman_bunga_raya": KnownPlace(3.5650, 101.6480, ("taman bunga raya", "tmn bunga raya")),
    # Batang Kali (44300)
    "batang_kali_town": KnownPlace(3.4500, 101.6333, ("batang kali", "btang kali", "pekan batang kali", "bandar batang kali", "44300")),
    "batang_kali_bandar_utama": KnownPlace(3.4515, 101.6345, ("bandar utama batang kali", "bandar utama btang kali")),
    "batang_kali_taman_seri": KnownPlace(3.4520, 101.6350, ("taman seri batang kali", "tmn seri batang kali", "apt seri tanjung", "seri tanjung")),
    "batang_kali_kg": KnownPlace(3.4480, 101.6320, ("kampung batang kali", "kg batang kali")),
    "batang_kali_jalan": KnownPlace(3.4510, 101.6340, ("jalan batang kali", "jln batang kali", "lorong batang kali", "jalan meranti", "jalan sumarak", "jalan widuri")),
    # Rasa (44200)
    "rasa_town": KnownPlace(3.5000, 101.5333, ("rasa", "pekan rasa", "bandar rasa", "44200")),
    "rasa_taman_seri": KnownPlace(3.5015, 101.5345, ("taman seri rasa", "tmn seri rasa", "jalan angsana", "taman angsana")),
    "rasa_taman_jaya": KnownPlace(3.5020, 101.5350, ("taman rasa jaya", "tmn rasa jaya")),
    "rasa_taman_desa": KnownPlace(3.5010, 101.5340, ("taman desa rasa", "tmn desa rasa", "desa anggerik", "taman desa anggerik")),
    "rasa_taman_keruing": KnownPlace(3.5008, 101.5338, ("taman keruing", "tmn keruing", "jalan keruing")),
    "rasa_felda": KnownPlace(3.5050, 101.5300, ("felda rasa",)),
    "rasa_kg": KnownPlace(3.4980, 101.5320, ("kampung rasa", "kg rasa", "kg seri serendah")),
    "rasa_jalan": KnownPlace(3.5005, 101.5335, ("jalan rasa", "jln rasa", "lorong rasa")),
    # Serendah (48200)
    "serendah_town": KnownPlace(3.3667, 101.6000, ("serendah", "pekan serendah", "48200")),
    "serendah_taman_sri": KnownPlace(3.3680, 101.6020, ("taman sri serendah", "tmn sri serendah")),
    "serendah_taman_desa": KnownPlace(3.3675, 101.6015, ("taman desa kiambang", "desa kiambang", "jalan kiambang")),
    "serendah_kg": KnownPlace(3.3650, 101.5980, ("kampung serendah", "kg serendah", "kg seri serendah", "jalan melati")),
    "serendah_jalan": KnownPlace(3.3670, 101.6005, ("jalan serendah", "jln serendah", "lorong serendah", "jalan kesumba", "jalan anggerik")),
    "serendah_seksyen": KnownPlace(3.3685, 101.6025, ("seksyen bb18", "seksyen bs 10")),
    # Kalumpang & Kuala Kalumpang (44100)
    "kalumpang_town": KnownPlace(3.4833, 101.5167, ("kalumpang", "pekan kalumpang", "44100")),
    "kuala_kalumpang": KnownPlace(3.5800, 101.4800, ("kuala kalumpang", "kl kalumpang")),
    "kalumpang_kg": KnownPlace(3.4850, 101.5150, ("kampung kalumpang", "kg kalumpang")),
    "kalumpang_jalan": KnownPlace(3.4840, 101.5170, ("jalan kalumpang", "jln kalumpang", "lorong kalumpang")),
    # Kerling (44100)
    "kerling_town": KnownPlace(3.4833, 101.5833, ("kerling", "pekan kerling", "44100")),
    "kerling_kg": KnownPlace(3.4850, 101.5850, ("kampung kerling", "kg kerling")),
    "kerling_jalan": KnownPlace(3.4840, 101.5840, ("jalan kerling", "jln kerling", "lorong kerling")),
    # Peretak / Pertak
    "peretak_town": KnownPlace(3.4300, 101.5700, ("peretak", "pertak", "pekan peretak", "pekan pertak")),
    "peretak_kg": KnownPlace(3.4320, 101.5720, ("kampung pertak", "kg pertak", "kampung peretak", "kg peretak")),
    # Ulu Yam (44300)
    "ulu_yam_town": KnownPlace(3.4167, 101.6833, ("ulu yam", "pekan ulu yam", "44300")),
    "ulu_yam_baru": KnownPlace(3.4200, 101.6850, ("ulu yam baru", "ulu yam bharu")),
    "ulu_yam_lama": KnownPlace(3.4150, 101.6800, ("ulu yam lama",)),
    "ulu_yam_felda": KnownPlace(3.4210, 101.6860, ("felda ulu yam",)),
    "ulu_yam_kg": KnownPlace(3.4180, 101.6820, ("kampung ulu yam", "kg ulu yam")),
    # Bukit Beruntung & Bukit Sentosa (48300)
    "bukit_beruntung": KnownPlace(3.3833, 101.5667, ("bukit beruntung", "bkt beruntung", "bb7", "bb18", "48300", "jalan bukit beruntung")),
    "bukit_beruntung_taman": KnownPlace(3.3840, 101.5675, ("taman bukit beruntung", "tmn bukit beruntung", "tmn bkt beruntung")),
    "bukit_beruntung_sek": KnownPlace(3.3845, 101.5670, ("sek bb7", "sek bb18", "seksyen bb7", "seksyen bb18")),
    "bukit_sentosa": KnownPlace(3.3850, 101.5680, ("bukit sentosa", "bkt sentosa", "perumahan bakawali", "bakawali")),
    "bukit_sentosa_taman": KnownPlace(3.3860, 101.5690, ("taman bukit sentosa", "tmn bukit sentosa", "tmn bkt sentosa", "bukit sentosa 3")),
    # Sungai Choh (48000)
    "sungai_choh": KnownPlace(3.3500, 101.5833, ("sungai choh", "sg choh", "pekan sungai choh", "48000")),
    "sungai_choh_taman": KnownPlace(3.3510, 101.5840, ("taman sungai choh", "tmn sungai choh", "tmn sg choh")),
    # Lembah Beringin (44200)
    "lembah_beringin": KnownPlace(3.5100, 101.5400, ("lembah beringin", "44200")),
    "lembah_beringin_taman": KnownPlace(3.5110, 101.5410, ("taman lembah beringin", "tmn lembah beringin")),
    # Ampang Pecah
    "ampang_pecah": KnownPlace(3.4000, 101.5500, ("ampang pecah", "ampang pechah", "pekan ampang pecah")),
    "ampang_pecah_kg": KnownPlace(3.4020, 101.5520, ("kampung ampang pecah", "kg ampang pecah", "kampung ampang pechah", "kg ampang pechah")),
    # Hulu Bernam
    "hulu_bernam": KnownPlace(3.6833, 101.5000, ("hulu bernam", "ulu bernam", "pekan hulu bernam")),
    # Sungai Tinggi
    "sungai_tinggi": KnownPlace(3.6500, 101.5500, ("sungai tinggi", "sg tinggi")),
    "sungai_tinggi_kg": KnownPlace(3.6510, 101.5510, ("kampung sungai tinggi", "kg sungai tinggi")),
    "sungai_tinggi_felda": KnownPlace(3.6520, 101.5520, ("felda sungai tinggi",)),
    # Sungai Gumut
    "sungai_gumut": KnownPlace(3.6000, 101.5200, ("sungai gumut", "sg gumut")),
    "sungai_gumut_kg": KnownPlace(3.6010, 101.5210, ("kampung sungai gumut", "kg sungai gumut")),
    # Buloh Telor / Telur
    "buloh_telor": KnownPlace(3.5200, 101.5800, ("buloh telor", "buloh telur", "kampung buloh telor")),
    # 共通のtaman
    "taman_garing": KnownPlace(3.5650, 101.6490, ("taman garing", "tmn garing")),
    "taman_bunga_raya": KnownPlace(3.5655, 101.6495, ("taman bunga raya", "tmn bunga raya")),
    "taman_widuri": KnownPlace(3.3835, 101.5672, ("taman widuri", "tmn widuri", "taman widuri 2")),
    # FELDA
    "felda_gedangsa": KnownPlace(3.5060, 101.5310, ("felda gedangsa",)),
    # Rawang（隣接地域。住所に含まれることがある）
    "rawang": KnownPlace(3.3214, 101.5767, ("rawang", "pekan rawang", "48000", "48010")),
    "rawang_bandar": KnownPlace(3.3230, 101.5785, ("bandar utama rawang", "bdr sg. buaya", "bandar sg buaya")),
    "rawang_taman": KnownPlace(3.3250, 101.5800, ("taman rawang", "tmn rawang", "jalan cemperai")),
}

# 公式13 mukim（表記揺れを含む）
MUKIM_CENTRES: dict[str, MukimCentre] = {
    "Kuala Kubu Bharu": MukimCentre(3.5667, 101.6500, 0.03),
    "Hulu Bernam": MukimCentre(3.6833, 101.5000, 0.04),
    "Kalumpang": MukimCentre(3.4833, 101.5167, 0.025),
    "Sungai Gumut": MukimCentre(3.6000, 101.5200, 0.03),
    "Sungai Tinggi": MukimCentre(3.6500, 101.5500, 0.03),
    "Kerling": MukimCentre(3.4833, 101.5833, 0.025),
    "Ampang Pecah": MukimCentre(3.4000, 101.5500, 0.025),
    "Ampang Pechah": MukimCentre(3.4000, 101.5500, 0.025),
    "Buloh Telur": MukimCentre(3.5200, 101.5800, 0.02),
    "Buloh Telor": MukimCentre(3.5200, 101.5800, 0.02),
    "Pertak": MukimCentre(3.4300, 101.5700, 0.02),
    "Peretak": MukimCentre(3.4300, 101.5700, 0.02),
    "Rasa": MukimCentre(3.5000, 101.5333, 0.02),
    "Batang Kali": MukimCentre(3.4500, 101.6333, 0.025),
    "Hulu Yam": MukimCentre(3.4167, 101.6833, 0.03),
    "Ulu Yam": MukimCentre(3.4167, 101.6833, 0.03),
    "Serendah": MukimCentre(3.3667, 101.6000, 0.02),
    "Kuala Kalumpang": MukimCentre(3.5800, 101.4800, 0.025),
}

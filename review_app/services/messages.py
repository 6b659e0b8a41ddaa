"""
Report phrases in the three supported languages.

Only generated text lives here. Category names are relabelled separately,
after all scoring is done.
"""
SUPPORTED_LANGUAGES = ("tr", "en", "fr")
DEFAULT_LANGUAGE = "en"

MESSAGES = {
    # SWOT
    "swot.develop": {
        "tr": '"{name}" alanında gelişim planı oluşturulmalı.',
        "en": 'A development plan should be created for "{name}".',
        "fr": "Un plan de développement doit être établi pour « {name} ».",
    },
    "swot.spread": {
        "tr": '"{name}" alanındaki güçlü yön yaygınlaştırılmalı.',
        "en": 'The strength in "{name}" should be shared across the team.',
        "fr": "Le point fort « {name} » doit être diffusé dans l'équipe.",
    },
    # compensation
    "comp.rationale": {
        "tr": "Genel skor: {overall} / 5 • Değerlendirici: {count} • Güven: {confidence}% • Havuz: {pool}",
        "en": "Overall: {overall} / 5 • Evaluators: {count} • Confidence: {confidence}% • Pool: {pool}",
        "fr": "Global : {overall} / 5 • Évaluateurs : {count} • Confiance : {confidence}% • Pool : {pool}",
    },
    "comp.pool.org": {"tr": "Kurum", "en": "Organization", "fr": "Organisation"},
    "comp.pool.department": {"tr": "Departman", "en": "Department", "fr": "Département"},
    "comp.pool.manager": {"tr": "Yönetici", "en": "Manager", "fr": "Manager"},
    "comp.action": {
        "tr": "{name} alanında gelişim: hedef {current} → {goal} (3 ay)",
        "en": "Development in {name}: target {current} → {goal} (3 months)",
        "fr": "Progrès sur {name} : objectif {current} → {goal} (3 mois)",
    },
    "comp.insufficient": {
        "tr": "Gelişim alanı: veri yetersiz (kategori kırılımı bulunamadı).",
        "en": "Development area: insufficient data (no category breakdown).",
        "fr": "Axe de progrès : données insuffisantes (pas de ventilation par catégorie).",
    },
    # development plan
    "dev.overconfident": {
        "tr": '"{name}" alanında kendinizi değerlendirmeniz, diğerlerinin değerlendirmesinden daha yüksek. '
              "Bu alanda farkındalığınızı artırmanız önerilir.",
        "en": 'You rate yourself higher than others do in "{name}". Building awareness in this area is recommended.',
        "fr": "Vous vous évaluez plus haut que les autres sur « {name} ». Il est conseillé de renforcer votre recul sur ce point.",
    },
    "dev.underconfident": {
        "tr": '"{name}" alanında potansiyelinizi yeterince fark etmiyorsunuz. Diğerleri sizi daha yüksek değerlendiriyor.',
        "en": 'You underestimate yourself in "{name}". Others rate you higher.',
        "fr": "Vous sous-estimez votre potentiel sur « {name} ». Les autres vous évaluent plus haut.",
    },
    "dev.improve": {
        "tr": '"{name}" alanında gelişim göstermeniz gerekiyor. Bu konuda eğitim veya mentorluk desteği alabilirsiniz.',
        "en": 'You need to improve in "{name}". Training or mentoring can help.',
        "fr": "Vous devez progresser sur « {name} ». Une formation ou un mentorat peut vous aider.",
    },
    "dev.strength": {
        "tr": '"{name}" alanında güçlüsünüz. Bu yetkinliğinizi takım arkadaşlarınıza aktararak liderlik gösterebilirsiniz.',
        "en": 'You are strong in "{name}". Share this skill with your teammates to show leadership.',
        "fr": "Vous êtes fort sur « {name} ». Partagez cette compétence avec votre équipe.",
    },
    # personal results summary rows
    "summary.self": {"tr": "Öz Değerlendirme", "en": "Self Evaluation", "fr": "Auto-évaluation"},
    "summary.team": {"tr": "Ekip (Ortalama)", "en": "Team (Average)", "fr": "Équipe (moyenne)"},
    # action plans
    "plan.title": {"tr": "Eylem Planı", "en": "Action Plan", "fr": "Plan d'action"},
    "plan.item": {
        "tr": '"{name}" alanında gelişim planı başlat',
        "en": 'Start a development plan for "{name}"',
        "fr": "Démarrer un plan de développement pour « {name} »",
    },
}


def normalize_language(lang, default=DEFAULT_LANGUAGE):
    lang = (lang or "").strip().lower()[:2]
    return lang if lang in SUPPORTED_LANGUAGES else default


def message(key, lang=DEFAULT_LANGUAGE, **params):
    phrases = MESSAGES[key]
    text = phrases.get(normalize_language(lang)) or phrases[DEFAULT_LANGUAGE]
    return text.format(**params) if params else text

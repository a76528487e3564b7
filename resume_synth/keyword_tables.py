"""keyword_tables.py
Constant keyword tables and regex patterns shared by the pipeline stages.

Everything in here is plain data. Matching helpers live with the stage that
uses them.
"""
from typing import Dict, List, Tuple

# --------------------------------------------------------------
# SECTION HEADINGS
# --------------------------------------------------------------
# Keys are the normalized section types produced by the TextSegmenter.
SECTION_KEYWORDS: Dict[str, List[str]] = {
    "summary": [
        "summary",
        "professional summary",
        "career summary",
        "executive summary",
        "profile",
        "professional profile",
        "personal profile",
        "about",
        "about me",
        "objective",
        "career objective",
        "overview",
    ],
    "experience": [
        "experience",
        "work experience",
        "professional experience",
        "relevant experience",
        "employment",
        "employment history",
        "work history",
        "career history",
        "professional background",
    ],
    "projects": [
        "projects",
        "project",
        "personal projects",
        "side projects",
        "selected projects",
        "key projects",
        "academic projects",
        "portfolio",
    ],
    "education": [
        "education",
        "academic background",
        "education and training",
        "academic qualifications",
        "qualifications",
        "academics",
    ],
    "skills": [
        "skills",
        "technical skills",
        "core skills",
        "key skills",
        "skills and tools",
        "core competencies",
        "competencies",
        "technologies",
        "tools",
        "tech stack",
        "expertise",
        "strengths",
        "programming languages",
    ],
    "other": [
        "certifications",
        "certificates",
        "awards",
        "honors",
        "achievements",
        "publications",
        "languages",
        "interests",
        "hobbies",
        "volunteering",
        "volunteer experience",
        "references",
        "activities",
        "contact",
        "contact information",
        "additional information",
    ],
}

# --------------------------------------------------------------
# LINE CLASSIFICATION
# --------------------------------------------------------------
BULLET_GLYPHS: Tuple[str, ...] = (
    "-", "•", "▪", "●", "·", "*", "◦", "‣", "–", "—", "►", "➢", "✓", "\uf0b7", "■", "○",
)

# `1.` / `1)` list markers
NUMBERED_BULLET_REGEX = r"^\d{1,2}[.)]\s+"

# Verbs that open an achievement line. Matched against the first word, lowercased.
ACTION_VERBS: Tuple[str, ...] = (
    "achieved", "analyzed", "architected", "automated", "boosted", "built",
    "collaborated", "conducted", "coordinated", "created", "cut", "delivered",
    "deployed", "designed", "developed", "drove", "engineered", "enhanced",
    "established", "grew", "implemented", "improved", "increased", "initiated",
    "integrated", "launched", "led", "maintained", "managed", "mentored",
    "migrated", "modernized", "optimized", "owned", "partnered", "pioneered",
    "reduced", "refactored", "researched", "scaled", "shipped", "spearheaded",
    "streamlined", "supported", "trained", "upgraded", "upsold", "wrote",
)

# --------------------------------------------------------------
# EXPERIENCE HEURISTICS
# --------------------------------------------------------------
COMPANY_KEYWORDS: Tuple[str, ...] = (
    "inc", "llc", "ltd", "limited", "corp", "corporation", "company",
    "gmbh", "plc", "group", "technologies", "technology", "labs", "solutions",
    "systems", "software", "university", "college", "institute", "agency",
    "bank", "partners", "consulting", "studio", "studios", "ventures",
    "holdings", "hospital", "foundation", "networks", "media", "services",
    "enterprises", "industries", "global", "analytics",
)

ROLE_KEYWORDS: Tuple[str, ...] = (
    "engineer", "developer", "manager", "director", "analyst", "designer",
    "scientist", "intern", "consultant", "lead", "architect", "administrator",
    "specialist", "coordinator", "officer", "head", "vp", "president",
    "associate", "assistant", "technician", "editor", "writer", "teacher",
    "researcher", "programmer", "founder", "owner", "representative",
    "accountant", "nurse", "principal", "staff", "senior", "junior",
)

# Words marking an ongoing role in a date range
PRESENT_TOKENS: Tuple[str, ...] = ("present", "current", "now", "today", "ongoing")

MONTH_MAP: Dict[str, str] = {
    "jan": "01",
    "january": "01",
    "feb": "02",
    "february": "02",
    "mar": "03",
    "march": "03",
    "apr": "04",
    "april": "04",
    "may": "05",
    "jun": "06",
    "june": "06",
    "jul": "07",
    "july": "07",
    "aug": "08",
    "august": "08",
    "sep": "09",
    "sept": "09",
    "september": "09",
    "oct": "10",
    "october": "10",
    "nov": "11",
    "november": "11",
    "dec": "12",
    "december": "12",
}

# --------------------------------------------------------------
# EDUCATION HEURISTICS
# --------------------------------------------------------------
# Abbreviations are matched case-sensitively so that e.g. "ma" in prose is ignored.
DEGREE_ABBREVIATION_REGEX = (
    r"(?<![A-Za-z])"
    r"(?:"
    r"B\.?S\.?c?\.?|B\.?A\.?|B\.?Eng\.?|B\.?Tech\.?|BBA|B\.?Com\.?"
    r"|M\.?S\.?c?\.?|M\.?A\.?|M\.?B\.?A\.?|M\.?Eng\.?|M\.?Tech\.?|M\.?Com\.?|M\.?Phil\.?"
    r"|Ph\.?D\.?|D\.?Phil\.?|LL\.?B\.?|LL\.?M\.?|A\.A\.|A\.S\.|HND|GCSEs?"
    r")"
    r"(?![A-Za-z])"
)

DEGREE_LONG_FORM_REGEX = (
    r"\b(?:"
    r"bachelor(?:'s|s)?|master(?:'s|s)?|doctor of|doctorate|associate(?:'s)? degree|associate of"
    r"|high school diploma|diploma|certificate|ged|a-levels?|higher national"
    r")\b"
)

SCHOOL_KEYWORDS: Tuple[str, ...] = (
    "university", "college", "institute", "school", "academy", "polytechnic",
    "conservatory", "seminary", "univ",
)

GRADE_REGEX = (
    r"\b(?:gpa|cgpa|grade)\s*[:\-]?\s*\d(?:\.\d+)?(?:\s*/\s*\d(?:\.\d+)?)?"
    r"|\b(?:first class honou?rs|upper second|lower second|2:1|2:2|summa cum laude|magna cum laude|cum laude|with distinction|with honou?rs)\b"
)

# --------------------------------------------------------------
# TECHNOLOGY TOKENS
# --------------------------------------------------------------
# (display name, case-insensitive pattern)
TECH_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("Python", r"\bpython\b"),
    ("Java", r"\bjava\b"),
    ("JavaScript", r"\bjavascript\b"),
    ("TypeScript", r"\btypescript\b"),
    ("React", r"\breact(?:\.js|js)?\b"),
    ("Next.js", r"\bnext\.?js\b"),
    ("Node.js", r"\bnode(?:\.js|js)?\b"),
    ("Express", r"\bexpress(?:\.js|js)\b"),
    ("Vue", r"\bvue(?:\.js|js)?\b"),
    ("Angular", r"\bangular(?:js)?\b"),
    ("Svelte", r"\bsvelte\b"),
    ("Redux", r"\bredux\b"),
    ("Tailwind", r"\btailwind(?:css)?\b"),
    ("GraphQL", r"\bgraphql\b"),
    ("REST APIs", r"\brest(?:ful)? apis?\b"),
    ("HTML", r"\bhtml5?\b"),
    ("CSS", r"\bcss3?\b"),
    ("AWS", r"\baws\b"),
    ("Azure", r"\bazure\b"),
    ("GCP", r"\bgcp\b"),
    ("Docker", r"\bdocker\b"),
    ("Kubernetes", r"\bkubernetes\b|\bk8s\b"),
    ("Terraform", r"\bterraform\b"),
    ("Jenkins", r"\bjenkins\b"),
    ("Git", r"\bgit\b"),
    ("Linux", r"\blinux\b"),
    ("CI/CD", r"\bci/cd\b"),
    ("PostgreSQL", r"\bpostgres(?:ql)?\b"),
    ("MySQL", r"\bmysql\b"),
    ("MongoDB", r"\bmongo(?:db)?\b"),
    ("Redis", r"\bredis\b"),
    ("DynamoDB", r"\bdynamodb\b"),
    ("Elasticsearch", r"\belasticsearch\b"),
    ("SQL", r"\bsql\b"),
    ("Kafka", r"\bkafka\b"),
    ("Spark", r"\b(?:apache )?spark\b"),
    ("Airflow", r"\bairflow\b"),
    ("Snowflake", r"\bsnowflake\b"),
    ("Django", r"\bdjango\b"),
    ("Flask", r"\bflask\b"),
    ("FastAPI", r"\bfastapi\b"),
    ("Spring Boot", r"\bspring boot\b"),
    ("Ruby on Rails", r"\b(?:ruby on )?rails\b"),
    ("Go", r"\bgolang\b"),
    ("Rust", r"\brust\b"),
    ("C++", r"(?<![A-Za-z0-9])c\+\+(?![A-Za-z0-9])"),
    ("C#", r"(?<![A-Za-z0-9])c#(?![A-Za-z0-9])"),
    (".NET", r"(?<![A-Za-z0-9.])\.net\b"),
    ("PHP", r"\bphp\b"),
    ("Kotlin", r"\bkotlin\b"),
    ("Swift", r"\bswift\b"),
    ("Scala", r"\bscala\b"),
    ("Pandas", r"\bpandas\b"),
    ("NumPy", r"\bnumpy\b"),
    ("TensorFlow", r"\btensorflow\b"),
    ("PyTorch", r"\bpytorch\b"),
    ("scikit-learn", r"\bscikit-learn\b|\bsklearn\b"),
    ("Tableau", r"\btableau\b"),
    ("Power BI", r"\bpower ?bi\b"),
    ("Google Analytics", r"\bgoogle analytics(?: 4)?\b"),
    ("Figma", r"\bfigma\b"),
    ("Jira", r"\bjira\b"),
    ("Socket.IO", r"\bsocket\.?io\b"),
    ("Fly.io", r"\bfly\.io\b"),
)

# Product names spelled like bare domains; not links unless a path follows
TECH_DOMAIN_NAMES: Tuple[str, ...] = (
    "socket.io", "fly.io", "render.com", "netlify.app", "vercel.app", "supabase.io",
)

# --------------------------------------------------------------
# SANITIZER TABLES
# --------------------------------------------------------------
# A value consisting only of one of these is boilerplate, not content.
NOISE_WORDS: Tuple[str, ...] = (
    "summary", "profile", "objective", "present", "current", "now", "today",
    "n/a", "na", "none", "null", "undefined", "tbd", "resume", "cv",
    "curriculum vitae", "skills", "experience", "education", "projects",
    "contact", "references", "references available upon request",
    "lorem ipsum", "project", "role", "company",
)

CITY_TOKENS: Tuple[str, ...] = (
    "london", "manchester", "dublin", "new york", "greater new york",
    "new york city", "nyc", "san francisco", "los angeles", "san diego",
    "chicago", "boston", "seattle", "austin", "denver", "colorado springs",
    "richmond", "toronto", "berlin", "paris", "amsterdam", "sydney",
    "singapore", "bangalore", "remote", "hybrid", "onsite", "on-site",
    "united kingdom", "united states", "usa", "uk",
)

PLACEHOLDER_REGEX = r"lorem ipsum|dummy text|add here"

# --------------------------------------------------------------
# DRAFT SYNTHESIS
# --------------------------------------------------------------
REWRITE_KEYWORDS: Tuple[str, ...] = (
    "reframe", "rewrite", "refresh", "revise", "rework", "tailor", "adapt",
    "customize", "align", "modernize", "update", "optimize", "enhance",
)

# Prepended to a normalized bullet that does not open with an action verb
NORMALIZE_VERBS: Tuple[str, ...] = (
    "Built", "Developed", "Implemented", "Architected", "Optimized", "Improved",
)

# Opening verbs for rewritten placeholder / too-short lines
REWRITE_VERBS: Tuple[str, ...] = (
    "Delivered", "Drove", "Optimized", "Implemented", "Elevated",
)

# Outcome verbs emphasised in locally normalized bullets
EMPHASIS_VERBS: Tuple[str, ...] = ("optimized", "reduced", "improved", "increased")

STOPWORDS: Tuple[str, ...] = (
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "has",
    "have", "in", "is", "it", "of", "on", "or", "our", "that", "the", "their",
    "this", "to", "we", "will", "with", "you", "your",
)

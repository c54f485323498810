# src/minipolar/config.py

# Trailing spaces on some lines are part of the art.
BANNER_ART = r"""__________      .__               .__        
\______   \____ |  | _____ _______|__| ______
 |     ___/  _ \|  | \__  \\_  __ \  |/  ___/
 |    |  (  <_> )  |__/ __ \|  | \/  |\___ \ 
 |____|   \____/|____(____  /__|  |__/____  >
                          \/              \/ """

DEFAULT_INPUT_DIR = "src"
DEFAULT_OUTPUT_DIR = "dist"

IGNORE_FILENAME = ".minifyignore"

# Lower-cased extension -> FileKind name. Anything else is copied.
EXTENSION_KINDS = {
    ".js": "JS",
    ".css": "CSS",
    ".html": "HTML",
    ".ejs": "HTML",
}

ECMA_TARGET = 2022

# Spans passed through the HTML minifier untouched, in match order.
# Kept to the regex subset shared by Python `re` and JavaScript RegExp.
HTML_IGNORE_FRAGMENTS = (
    r"<%[\s\S]*?%>",                                   # EJS
    r"<\?[\s\S]*?\?>",                                 # PHP-style
    r"\{\{[\s\S]*?\}\}",                               # Mustache/Handlebars/Vue
    r"\{%[\s\S]*?%\}",                                 # Liquid/Django/Nunjucks
    r"\$\{[\s\S]*?\}",                                 # template literals
    r"<jsx>[\s\S]*?</jsx>",                            # custom JSX blocks
    r"(?:^|(?<=\s))\.[\w-]+\s*\{[\s\S]*?\}",           # CSS class blocks in script text
    r"(?:^|(?<=\s))#[\w-]+\s*\{[\s\S]*?\}",            # CSS id blocks
    r"(?:^|(?<=\s))@\w+[\s\S]*?\{[\s\S]*?\}",          # CSS at-rules
    r"React\.createElement\([\s\S]*?\)",
    r"const\s+\w+\s*=\s*styled\.[\s\S]*?`[\s\S]*?`",   # styled-components
    r"import\s+.*\s+from\s+['\"].*['\"]",
    r"export\s+.*\{[\s\S]*?\}",
)

HTML_PROCESS_SCRIPTS = ("application/ld+json",)

NODE_TOOLS = {
    "JS": "terser",
    "CSS": "cleancss",
    "HTML": "html-minifier-terser",
}

ENGINES = ("auto", "python", "node")

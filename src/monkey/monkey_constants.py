"""
Static token tables for the Monkey language.

Every token kind is a plain string constant. The lexer uses `keywords` to tell
identifiers from reserved words and `token_hashmap` for longest-match operator
recognition; the parser keys its handler registries and precedence table on the
same kind strings.

Exports:
    - token kind constants (EOF, IDENT, INT, ...)
    - keywords: reserved word -> kind
    - token_hashmap: operator/punctuation spelling -> kind
    - operator_tokens: kinds the parser treats as binary operators
"""

# Special
ILLEGAL = "ILLEGAL"
EOF = "EOF"

# Identifiers and literals
IDENT = "IDENT"
INT = "INT"
STRING = "STRING"

# Operators
ASSIGN = "ASSIGN"
PLUS = "PLUS"
MINUS = "MINUS"
BANG = "BANG"
ASTERISK = "ASTERISK"
SLASH = "SLASH"
LT = "LT"
GT = "GT"
EQ = "EQ"
NOT_EQ = "NOT_EQ"

# Delimiters
COMMA = "COMMA"
SEMICOLON = "SEMICOLON"
COLON = "COLON"
DOT = "DOT"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
LBRACE = "LBRACE"
RBRACE = "RBRACE"
LBRACKET = "LBRACKET"
RBRACKET = "RBRACKET"

# Keywords
FUNCTION = "FUNCTION"
LET = "LET"
TRUE = "TRUE"
FALSE = "FALSE"
IF = "IF"
ELSE = "ELSE"
RETURN = "RETURN"
FOR = "FOR"

keywords: dict[str, str] = {
    "fn": FUNCTION,
    "let": LET,
    "true": TRUE,
    "false": FALSE,
    "if": IF,
    "else": ELSE,
    "return": RETURN,
    "for": FOR,
}

token_hashmap: dict[str, str] = {
    "=": ASSIGN,
    "==": EQ,
    "!": BANG,
    "!=": NOT_EQ,
    "+": PLUS,
    "-": MINUS,
    "*": ASTERISK,
    "/": SLASH,
    "<": LT,
    ">": GT,
    ",": COMMA,
    ";": SEMICOLON,
    ":": COLON,
    ".": DOT,
    "(": LPAREN,
    ")": RPAREN,
    "{": LBRACE,
    "}": RBRACE,
    "[": LBRACKET,
    "]": RBRACKET,
}

operator_tokens: tuple[str, ...] = (
    PLUS,
    MINUS,
    ASTERISK,
    SLASH,
    EQ,
    NOT_EQ,
    LT,
    GT,
)

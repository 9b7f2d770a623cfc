from __future__ import annotations

"""Word lists used by the answer analyzer.

Curated, lowercase, small on purpose: they stand in for a part-of-speech and
sentiment tagger on short student answers about programming.
"""

# Programming vocabulary scanned by substring containment.
TECH_TERMS = [
    "algorithm",
    "variable",
    "function",
    "class",
    "object",
    "inheritance",
    "condition",
    "loop",
    "for",
    "while",
    "if",
    "else",
    "array",
    "list",
    "dictionary",
    "int",
    "string",
    "boolean",
    "float",
    "method",
    "property",
    "api",
    "framework",
    "language",
    "programming",
    "development",
    "library",
    "stack",
    "heap",
    "memory",
    "pointer",
    "reference",
    "value",
    "compiler",
    "interpreter",
    "code",
    "syntax",
    "operator",
    "recursion",
]

# Function words; anything else longer than two letters counts as content.
STOPWORDS = frozenset(
    """
    a about above after again against all also am an and any are as at be
    because been before being below between both but by can could did do does
    doing down during each either else even ever every few from further had has
    have having he her here hers him his how i in into is it its itself just
    like lot lots many may me might more most much must my no nor not now of
    off often on once only or other our ours out over own quite rather really
    same she should so some such than that the their theirs them then there
    these they this those though through thus to too under until up upon us
    very was we were what when where whether which while who whom whose why
    will with within without would yet you your yours one two three something
    anything everything thing things way ways kind sort
    """.split()
) - {"else", "while"}

POSITIVE_WORDS = frozenset(
    """
    good great easy clear simple useful helpful correct right sure understand
    understood know works working efficient powerful love like nice best
    better perfect reusable organized flexible important
    """.split()
)

NEGATIVE_WORDS = frozenset(
    """
    bad confusing confused confuse hard difficult unclear unsure lost wrong
    hate terrible awful useless impossible complicated weird strange broken
    fail fails failed error errors mess stuck doubt
    """.split()
)

NEGATORS = frozenset(
    """
    not no never dont don't doesnt doesn't didnt didn't cant can't cannot
    isnt isn't wasnt wasn't arent aren't wont won't nothing nobody neither
    """.split()
)

# Whole phrases scored as negative regardless of the words inside them.
NEGATIVE_PHRASES = ("no idea", "no clue", "makes no sense")

"""Symbol alphabet and avatar tokens.

The alphabet must hold at least order^2 + order + 1 distinct symbols for the
deck generator; 58 covers the reference order of 7 (57 symbols).
"""

SYMBOLS = (
    '🍎', '🍌', '🍒', '🍇', '🍉', '🍓', '🍑', '🍍',
    '🥝', '🥥', '🥑', '🍆', '🥔', '🥕', '🌽', '🌶️',
    '🥒', '🥦', '🍄', '🥜', '🥐', '🥖', '🥨', '🥞',
    '🧀', '🍖', '🍗', '🥩', '🥓', '🍔', '🍟', '🍕',
    '🌭', '🥪', '🌮', '🌯', '🍳', '🥘', '🍲', '🥣',
    '🥗', '🍿', '🧂', '🥫', '🍱', '🍘', '🍙', '🍚',
    '🍛', '🍜', '🍝', '🍠', '🍢', '🍣', '🍤', '🍥',
    '🍦', '🍧',
)

AVATARS = ('🦊', '🐼', '🐸', '🐙', '🦁', '🐧', '🐢', '🦉')

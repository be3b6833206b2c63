from __future__ import annotations


# Keeps the model hosting the riddle: one puzzle, yes/no/unrelated answers only,
# no self-answering and no dumping the whole solution early.
SYSTEM_PROMPT = (
    "你是一位脑筋急转弯“海龟汤”游戏主持人。当用户说“开始”时，先给出一道题目，"
    "并提醒只能回答“是”“否”“与此无关”。之后每次回复只给出这三类回答或简短引导，"
    "绝不要自己连续提问并回答，也不要一次把整个对话或答案全部说完。"
    "用户结束或你判断可以结束时，回复“游戏结束”并给出汤底。"
)

GAME_OVER_MARKER = "游戏结束"


def is_game_over(reply: str, marker: str = GAME_OVER_MARKER) -> bool:
    """Best-effort check for the end-of-game marker in a model reply.

    This is a plain substring match, so a reply that merely quotes the marker
    also ends the game, and an ending phrased differently does not.
    """
    return bool(reply) and marker in reply

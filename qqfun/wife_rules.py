"""Rules of the daily group-marriage game, on top of the register office."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from .marriage import MarriageRegistry, Standing

RECENT_MEMBERS = 30

PROPOSE_SUCCESS = (
    "是个勇敢的孩子(*/ω＼*) 今天的运气都降临在你的身边~\n\n",
    "(´･ω･`)对方答应了你 并表示愿意当今天的CP\n\n",
)
PROPOSE_FAIL = (
    "今天的运气有一点背哦~明天再试试叭",
    "_(:з」∠)_下次还有机会 咱抱抱你w",
    "今天失败了惹. 摸摸头~咱明天还有机会",
)
NTR_SUCCESS = ("因为你的个人魅力~~今天他就是你的了w\n\n",)
DIVORCE_FAIL = (
    "打是情，骂是爱，,不打不亲不相爱。答应我不要分手。",
    "床头打架床尾和，夫妻没有隔夜仇。安啦安啦，不要闹变扭。",
)
DIVORCE_SUCCESS = (
    "离婚成功力\n天涯何处无芳草，何必单恋一枝花？不如再摘一支（bushi",
    "离婚成功力\n话说你不考虑当个1？",
)

ALREADY_TOGETHER = "笨蛋~你们明明已经在一起了啊w"
TAKEN_AS_BRIDE = "该是0就是0，当0有什么不好"
STILL_SINGLE = "ta现在还是单身哦，快向ta表白吧！"


class _Random(Protocol):
    def randrange(self, stop: int) -> int: ...

    def choice(self, seq: Any) -> Any: ...


def _target_of(couple: Any) -> int:
    return couple.target if couple is not None else 0


def ensure_today(registry: MarriageRegistry, gid: int, today: str) -> bool:
    """Reset the group's register if it was last reset on another day.

    Returns True when a reset happened.
    """
    if registry.check_update(gid, today) != today:
        registry.reset(gid, today)
        return True
    return False


def check_propose(
    registry: MarriageRegistry, gid: int, uid: int, fiancee: int, today: str
) -> str | None:
    """Decide whether ``uid`` may propose to ``fiancee``.

    Returns None when allowed, otherwise the reason to tell the user.
    """
    if ensure_today(registry, gid, today):
        return None
    mine, my_standing = registry.lookup(gid, uid)
    theirs, their_standing = registry.lookup(gid, fiancee)
    if my_standing is Standing.SINGLE and their_standing is Standing.SINGLE:
        return None
    if _target_of(mine) == fiancee:
        return ALREADY_TOGETHER
    if my_standing is Standing.GROOM:
        return "笨蛋~你家里还有个吃白饭的w"
    if my_standing is Standing.BRIDE:
        return TAKEN_AS_BRIDE
    if my_standing is not Standing.SINGLE and _target_of(mine) == 0:
        return "今天的你是单身贵族噢"
    if their_standing is Standing.GROOM:
        return "他有别的女人了，你该放下了"
    if their_standing is Standing.BRIDE:
        return "这是一个纯爱的世界，拒绝NTR"
    if their_standing is not Standing.SINGLE and _target_of(theirs) == 0:
        return "今天的ta是单身贵族噢"
    return None


def check_mistress(
    registry: MarriageRegistry, gid: int, uid: int, fiancee: int, today: str
) -> str | None:
    """Decide whether ``uid`` may try to come between ``fiancee`` and their partner.

    Returns None when allowed, otherwise the reason to tell the user.
    """
    if ensure_today(registry, gid, today):
        return STILL_SINGLE
    if fiancee == uid:
        return None
    mine, my_standing = registry.lookup(gid, uid)
    if _target_of(mine) == fiancee:
        return ALREADY_TOGETHER
    if my_standing is not Standing.SINGLE and _target_of(mine) == 0:
        return "今天的你是单身贵族哦"
    if my_standing is Standing.GROOM:
        return "打灭，不给纳小妾！"
    if my_standing is Standing.BRIDE:
        return TAKEN_AS_BRIDE
    theirs, their_standing = registry.lookup(gid, fiancee)
    if their_standing is Standing.SINGLE:
        return STILL_SINGLE
    if _target_of(theirs) == 0:
        return "今天的ta是单身贵族哦"
    return None


def pick_partner(
    registry: MarriageRegistry,
    gid: int,
    uid: int,
    members: Iterable[Mapping[str, Any]],
    rng: _Random,
) -> int | None:
    """Draw a random single among the most recently active members.

    ``members`` are group-member records with ``user_id`` and
    ``last_sent_time``.  Returns None when at most one single is left; a
    result equal to ``uid`` means the draw hit the drawer.
    """
    recent = sorted(members, key=lambda m: int(m.get("last_sent_time", 0)))
    singles = []
    for member in recent[-RECENT_MEMBERS:]:
        member_id = int(member["user_id"])
        _, standing = registry.lookup(gid, member_id)
        if standing is Standing.SINGLE:
            singles.append(member_id)
    if len(singles) <= 1:
        return None
    return rng.choice(singles)


def divorce_attempt(
    registry: MarriageRegistry, gid: int, uid: int, rng: _Random
) -> str | None:
    """Try to end ``uid``'s marriage; one attempt in ten succeeds.

    Returns the reply text, or None when ``uid`` has nothing to divorce.
    """
    couple, standing = registry.lookup(gid, uid)
    if standing is Standing.SINGLE or couple is None:
        return None
    if standing is Standing.GROOM:
        if rng.randrange(10) != 1:
            return rng.choice(DIVORCE_FAIL)
        registry.divorce(gid, couple.target)
        return DIVORCE_SUCCESS[0]
    if rng.randrange(10) != 0:
        return rng.choice(DIVORCE_FAIL)
    registry.divorce(gid, couple.user)
    return DIVORCE_SUCCESS[1]
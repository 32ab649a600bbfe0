"""
coolshot/flow/handlers/games.py

Handles: games and fun commands

- Dice, coin flip, random number
- Magic 8-ball (needs a question)
- Random quote, joke, fact
"""

import random
from typing import Any, Dict

from coolshot.core.exceptions import UsageError
from coolshot.flow.commands import CommandContext
from utils.constants import (
    EIGHT_BALL_ANSWERS,
    EIGHT_BALL_USAGE,
    FACTS,
    GAMES_MESSAGE,
    JOKES,
    QUOTES,
)

DICE_FACES = ["⚀", "⚁", "⚂", "⚃", "⚄", "⚅"]


async def handle_games(ctx: CommandContext) -> Dict[str, Any]:
    return {"message": GAMES_MESSAGE.format(bot_name=ctx.dispatcher.settings.BOT_NAME)}


async def handle_dice(ctx: CommandContext) -> Dict[str, Any]:
    roll = random.randint(1, 6)
    return {"message": f"🎲 *Dice Roll*\n\n{DICE_FACES[roll - 1]} You rolled a *{roll}*!"}


async def handle_coin(ctx: CommandContext) -> Dict[str, Any]:
    side = random.choice(["Heads", "Tails"])
    return {"message": f"🪙 *Coin Flip*\n\nThe coin landed on *{side}*!"}


async def handle_number(ctx: CommandContext) -> Dict[str, Any]:
    number = random.randint(1, 100)
    return {"message": f"🔢 *Random Number*\n\nYour number is *{number}* (1-100)"}


async def handle_eight_ball(ctx: CommandContext) -> Dict[str, Any]:
    if not ctx.args:
        raise UsageError(EIGHT_BALL_USAGE)

    answer = random.choice(EIGHT_BALL_ANSWERS)
    return {"message": f"🎱 *Magic 8-Ball*\n\n❓ {ctx.text}\n\n🔮 {answer}"}


async def handle_quote(ctx: CommandContext) -> Dict[str, Any]:
    return {"message": f"💬 *Quote of the Moment*\n\n_{random.choice(QUOTES)}_"}


async def handle_joke(ctx: CommandContext) -> Dict[str, Any]:
    return {"message": f"😂 *Random Joke*\n\n{random.choice(JOKES)}"}


async def handle_fact(ctx: CommandContext) -> Dict[str, Any]:
    return {"message": f"🧠 *Fun Fact*\n\n{random.choice(FACTS)}"}

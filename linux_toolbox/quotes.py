import random

LINUX_QUOTES = [
    "Talk is cheap. Show me the code. - Linus Torvalds",
    "Given enough eyeballs, all bugs are shallow. - Eric S. Raymond",
    "Intelligence is the ability to avoid doing work, yet getting the work done. - Linus Torvalds",
    "If you think your users are idiots, only idiots will use it. - Linus Torvalds",
    "I'm doing a (free) operating system (just a hobby, won't be big and professional like gnu) - Linus Torvalds",
    "The most important thing in Open Source is that people are having fun and feeling like they're part of a community. - Mark Shuttleworth",
    "Free software is a matter of liberty, not price. - Richard Stallman",
    "Unix is simple. It just takes a genius to understand its simplicity. - Dennis Ritchie",
    "Controlling complexity is the essence of computer programming. - Brian Kernighan",
    "Those who don't understand Unix are condemned to reinvent it, poorly. - Henry Spencer",
]


def random_quote() -> str:
    return random.choice(LINUX_QUOTES)

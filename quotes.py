"""Quote of the day, picked by day of the year."""

from datetime import date
from typing import Optional

QUOTES = [
    "Every moment is a fresh beginning.",
    "Act as if what you do makes a difference. It does.",
    "Success is not final, failure is not fatal.",
    "Never bend your head. Always hold it high.",
    "Believe you can and you're halfway there.",
    "Someday is not a day of the week.",
    "Make each day your masterpiece.",
    "Do one thing every day that scares you.",
    "Happiness is not by chance, but by choice.",
    "It always seems impossible until it's done.",
    "Turn your wounds into wisdom.",
    "Focus on the journey, not the destination.",
    "Begin anywhere.",
    "Nothing will work unless you do.",
    "Don't watch the clock; do what it does. Keep going.",
    "The secret of getting ahead is getting started.",
    "Don't let yesterday take up too much of today.",
    "Quality is not an act, it is a habit.",
    "The journey of a thousand miles begins with one step.",
    "Well done is better than well said.",
    "Little things make big days.",
    "Sometimes later becomes never. Do it now.",
    "The future depends on what you do today.",
    "Success isn't always about greatness. It's about consistency.",
    "It does not matter how slowly you go as long as you do not stop.",
    "Don't count the days, make the days count.",
    "Where focus goes, energy flows.",
    "Either run the day, or the day runs you.",
    "A year from now you may wish you had started today.",
    "No pressure, no diamonds.",
    "It's not about perfect. It's about effort.",
    "All things are difficult before they are easy.",
    "Collect moments, not things.",
    "Light tomorrow with today.",
    "The way to get started is to quit talking and begin doing.",
    "Wake up with determination. Go to bed with satisfaction.",
]


def day_of_year(d: date) -> int:
    return d.timetuple().tm_yday


def quote_for(d: Optional[date] = None) -> str:
    # 1 January gets the first quote; the list cycles after that
    d = d or date.today()
    return QUOTES[(day_of_year(d) - 1) % len(QUOTES)]

"""
Pytest fixtures and sample article prose for study_extractor tests.
"""
import pytest


@pytest.fixture
def napoleon_text():
    """Two short dated sentences."""
    return "Napoleon was born in 1769. He became Emperor of France in 1804."


@pytest.fixture
def railway_text():
    """Sentences long enough for quiz questions, with plenty of numbers."""
    return (
        "The first railway opened in 1825 between two northern towns in England. "
        "The second line opened in 1830 and carried many passengers every day. "
        "By 1850 the network had grown across the whole country very quickly. "
        "Engineers counted 6000 miles of track before the century had ended. "
        "Some 120 companies owned lines and 45 of them merged during 1846 alone. "
        "Over 300 stations served 12 cities and 80 towns along the main routes."
    )


@pytest.fixture
def article_text():
    """Encyclopedia-style prose with dates, names and an nbsp entity."""
    return (
        "The Roman Empire was the post-Republican state of ancient Rome. "
        "Augustus became the first emperor in 27 BC after defeating Mark Antony. "
        "The empire reached its greatest extent under Trajan in 117 AD. "
        "Constantinople was founded by Constantine&nbsp;the Great in 330 AD. "
        "The Western Roman Empire collapsed in 476 when Odoacer deposed Romulus Augustulus. "
        "The Eastern Roman Empire survived until the fall of Constantinople in 1453. "
        "Historians such as Edward Gibbon wrote about its decline in 1776. "
        "Latin remained the language of scholarship in Europe for centuries. "
        "Roman law influenced the legal systems of many modern countries. "
        "In 1453 the Ottoman Sultan Mehmed entered the city after a long siege."
    )

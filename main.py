from __future__ import annotations
import streamlit as st
import pandas as pd
import numpy as np
from typing import List, Optional
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import io

from study_extractor.datatypes import StudyMaterial, TimelineEvent
from study_extractor.preprocessing import iter_sentences, strip_nbsp
from study_extractor.scoring import score_sentences
from study_extractor.pipeline import build_study_material, study_material_for_topic
from study_extractor.quiz import quiz_rounds, grade_answers
from study_extractor.sources import load_text, generate_default_title, SUPPORTED_EXTENSIONS
from study_extractor.wiki import WikiClient
from study_extractor.logging_utils import configure_logging

logger = configure_logging()


def preview(text: str, n: int = 80) -> str:
    return text[:n] + "..." if len(text) > n else text

def draw_timeline_chart(events: List[TimelineEvent]):
    """Plot timeline events on a year axis and return a PNG buffer."""
    years = [int(e.year) for e in events]
    fig, ax = plt.subplots(figsize=(12, 3))
    ax.hlines(0, min(years) - 5, max(years) + 5, color='lightgray', linewidth=2)
    ax.scatter(years, [0] * len(years), s=80, color='steelblue', zorder=3)

    # Alternate labels above/below so neighbours don't collide
    for i, (year, event) in enumerate(zip(years, events)):
        offset = 0.4 if i % 2 == 0 else -0.4
        ax.annotate(event.year, (year, 0), xytext=(year, offset),
                    ha='center', fontsize=9, fontweight='bold',
                    arrowprops=dict(arrowstyle='-', color='gray', alpha=0.6))

    ax.set_ylim(-1, 1)
    ax.get_yaxis().set_visible(False)
    for side in ('left', 'right', 'top'):
        ax.spines[side].set_visible(False)
    plt.tight_layout()

    buf = io.BytesIO()
    plt.savefig(buf, format='png', dpi=150, bbox_inches='tight')
    buf.seek(0)
    plt.close()
    return buf

def create_sidebar_controls():
    """Create sidebar controls for the source and generation options."""
    st.sidebar.header("Source")
    source = st.sidebar.radio("Study from", ["Encyclopedia article", "Uploaded file"])

    st.sidebar.header("Quiz")
    fixed_seed = st.sidebar.checkbox("Reproducible options", value=False,
                                     help="Use a fixed seed so option order is stable between runs")
    seed: Optional[int] = None
    if fixed_seed:
        seed = int(st.sidebar.number_input("Seed", min_value=0, value=42, step=1))

    st.sidebar.header("Debug Options")
    debug_mode = st.sidebar.checkbox("Enable Debug Mode", value=False, help="Show sentence scoring details")
    return source, seed, debug_mode

def load_from_encyclopedia():
    """Search box plus article picker; returns (title, text, topic, related) or None."""
    query = st.text_input("Search a topic", help="Any encyclopedia article title")
    if not query:
        return None

    with WikiClient() as client:
        results = client.search_topics(query)
        if not results:
            st.warning("No matching articles found")
            return None
        labels = {r.title: f"{r.title} - {r.description}" if r.description else r.title for r in results}
        choice = st.selectbox("Article", list(labels), format_func=labels.get)
        with st.spinner("Fetching article..."):
            details = client.get_topic_details(choice)

    if details is None:
        st.error(f"Could not load '{choice}'")
        return None
    topic, related = details
    return topic.title, topic.full_text, topic, related

def load_from_upload():
    uploaded_file = st.file_uploader(
        "Choose a text file",
        type=list(SUPPORTED_EXTENSIONS),
        help="Plain text, Markdown, RTF or saved HTML"
    )
    if uploaded_file is None:
        return None
    text = load_text(uploaded_file.name, uploaded_file.read())
    st.subheader("Original Text")
    st.text_area("Content", text, height=200, disabled=True)
    return generate_default_title(uploaded_file.name), text, None, []

def debug_sentences(text: str):
    """Show how the segmenter and the key-point scorer see the text."""
    st.header("🔍 Sentence Scoring")
    sentences = list(iter_sentences(text, 300))
    scored = score_sentences(sentences)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Sentences (first 300)", len(sentences))
    with col2:
        scores = np.array([s.score for s in scored]) if scored else np.zeros(1)
        st.metric("Mean Score", f"{scores.mean():.2f}")
    with col3:
        st.metric("Max Score", int(scores.max()))

    rows = []
    for i, s in enumerate(scored):
        rows.append({
            "Sentence #": i + 1,
            "Date Signal": s.features.get("date_signal", 0),
            "Proper Noun": s.features.get("proper_noun", 0),
            "Readable Length": s.features.get("readable_length", 0),
            "Total Score": s.score,
            "Text Preview": preview(strip_nbsp(s.text)),
        })
    st.dataframe(pd.DataFrame(rows), use_container_width=True)

def show_guide(material: StudyMaterial):
    st.header("🧠 Key Points")
    if not material.key_points:
        st.info("Not enough content to extract key points.")
    for point in material.key_points:
        st.markdown(f"- {point}")

def show_flashcards(material: StudyMaterial):
    st.header("🎴 Flashcards")
    if not material.flashcards:
        st.info("Not enough content to generate flashcards for this topic.")
        return
    for card in material.flashcards:
        with st.expander(card.front):
            st.write(f"**{card.back}**")
            st.caption(card.tag)

def show_quiz(material: StudyMaterial):
    st.header("📝 Quiz")
    if not material.quiz:
        st.info("Not enough content to generate a quiz for this topic.")
        return

    rounds = quiz_rounds(material.quiz)
    round_idx = st.selectbox("Round", range(len(rounds)), format_func=lambda i: f"Round {i + 1} of {len(rounds)}")
    questions = rounds[round_idx]

    placeholder = "Select an answer"
    answers = {}
    for i, q in enumerate(questions):
        st.markdown(f"**Q{i + 1}.** {q.question}")
        sel = st.radio("Options", [placeholder, *q.options], key=f"{q.id}-{round_idx}", label_visibility="collapsed")
        answers[q.id] = None if sel == placeholder else sel

    if st.button("Submit"):
        result = grade_answers(questions, answers)
        for q in questions:
            if q.id in result.correct_ids:
                st.success(f"{q.id}: ✅ {q.correct_answer}")
            else:
                st.error(f"{q.id}: ❌ correct answer was {q.correct_answer}")
        st.info(f"**Final Score: {result.score} / {result.total}**")

def show_timeline(material: StudyMaterial):
    st.header("📅 Timeline")
    if not material.timeline:
        st.info("No dated events found.")
        return
    try:
        st.image(draw_timeline_chart(list(material.timeline)), use_container_width=True)
    except Exception as e:
        st.error(f"Could not draw timeline chart: {str(e)}")
    df = pd.DataFrame([{"Year": e.year, "Event": e.description} for e in material.timeline])
    st.dataframe(df, use_container_width=True, hide_index=True)

def show_related(material: StudyMaterial):
    st.header("🔗 Related Topics")
    if not material.related_topics:
        st.info("No related topics.")
    for title in material.related_topics:
        st.markdown(f"- {title}")

def main():
    st.title("Study Companion")
    st.write("Turn an encyclopedia article or your own notes into key points, flashcards, a quiz and a timeline")

    source, seed, debug_mode = create_sidebar_controls()

    loaded = load_from_encyclopedia() if source == "Encyclopedia article" else load_from_upload()
    if loaded is None:
        return
    title, text, topic, related = loaded

    st.subheader(title)
    if topic is not None:
        if topic.thumbnail:
            st.image(topic.thumbnail, width=320)
        st.caption(topic.url)

    # Generated material belongs to one text; drop it when the source changes
    if st.session_state.get("material_title") != title:
        st.session_state.material = None
        st.session_state.material_title = title

    if st.button("Generate Study Material", type="primary"):
        try:
            with st.spinner("Analyzing text..."):
                if topic is not None:
                    material = study_material_for_topic(topic, related=related, rng=seed)
                else:
                    material = build_study_material(text, rng=seed)
                st.session_state.material = material
        except Exception as e:
            logger.exception("study material generation failed")
            st.error(f"Error generating study material: {str(e)}")
            st.exception(e)
            return

    material: Optional[StudyMaterial] = st.session_state.get("material")
    if material is None:
        return

    if debug_mode:
        st.markdown("---")
        debug_sentences(text)

    st.markdown("---")
    tabs = st.tabs(["Guide", "Flashcards", "Quiz", "Timeline", "Related"])
    with tabs[0]:
        show_guide(material)
    with tabs[1]:
        show_flashcards(material)
    with tabs[2]:
        show_quiz(material)
    with tabs[3]:
        show_timeline(material)
    with tabs[4]:
        show_related(material)

if __name__ == "__main__":
    main()

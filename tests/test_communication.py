from mockprep.services.communication import analyze_communication, filler_penalty


def test_empty_transcript():
    analysis = analyze_communication("")

    assert analysis.total_words == 0
    assert analysis.filler_count == 0
    assert analysis.filler_percentage == 0.0
    assert analysis.communication_score == 10
    assert analysis.found_fillers == []


def test_counts_fillers_on_word_boundaries():
    analysis = analyze_communication("um so like I think um basically it works")

    assert analysis.total_words == 9
    assert analysis.filler_count == 5
    assert analysis.filler_percentage == 55.6
    assert analysis.communication_score == 7
    assert {"word": "um", "count": 2} in analysis.found_fillers
    assert analysis.feedback.startswith("Good communication clarity")


def test_fillers_inside_words_are_ignored():
    analysis = analyze_communication("Summary: the likely outcome is solid")

    assert analysis.filler_count == 0


def test_penalty_thresholds_are_strict():
    assert filler_penalty(2.0) == 0
    assert filler_penalty(2.1) == 1
    assert filler_penalty(5.0) == 1
    assert filler_penalty(10.0) == 2
    assert filler_penalty(10.1) == 3


def test_exactly_two_percent_is_not_penalized():
    analysis = analyze_communication("um " + "word " * 49)

    assert analysis.total_words == 50
    assert analysis.filler_percentage == 2.0
    assert analysis.communication_score == 10


def test_many_fillers_are_named_in_feedback():
    analysis = analyze_communication("um um um uh uh like the answer")

    assert analysis.filler_count == 6
    assert analysis.feedback.startswith("You used 6 filler words")
    assert "um" in analysis.feedback

from prereq_graph.extractor import RequirementExtractor, RequirementKind, RequirementSpan

PRE = RequirementKind.PREREQUISITE
CO = RequirementKind.COREQUISITE


def _extract(text):
    return RequirementExtractor().extract(text)


def _single(text):
    spans = _extract(text)
    assert len(spans) == 1, spans
    return spans[0]


def test_no_prerequisite_sentences_are_dropped():
    assert _extract("sciences. No prerequisite. May") == []
    assert _extract("and has no prerequisites. This") == []
    assert _extract("Asia. No Prerequisites. Taught") == []


def test_prerequisite_with_colon():
    assert _single("system. Prerequisites: Math 30 or 31. Note:") == RequirementSpan(PRE, "Math 30 or 31")


def test_prerequisite_with_period_or_semicolon_separator():
    assert _single("included. Prerequisite. Mathematics 30-1. Note:").text == "Mathematics 30-1"
    assert _single(
        "practices. Prerequisites; EASIA 101 and 3 units in EASIA at a senior level, or consent of Department."
    ).text == "EASIA 101 and 3 units in EASIA at a senior level, or consent of Department"


def test_prerequisite_without_separator():
    assert _single("Prerequisite MATH 227, or both MATH 225 and 228").text == "MATH 227, or both MATH 225 and 228"


def test_extra_whitespace():
    assert _single("Prerequisite:   LAW 524").text == "LAW 524"


def test_french_prerequisites():
    assert _single("comptables. Prérequis: ADMI 311, 322 ou ACCTG 311, 322. Ce") == RequirementSpan(
        PRE, "ADMI 311, 322 ou ACCTG 311, 322"
    )
    assert _single("Préalable (s) : PSYCE 239 ou équivalent.").text == "PSYCE 239 ou équivalent"


def test_pre_or_corequisite_is_a_corequisite():
    assert _single("Pre- or co-requisites: ECON 101 and 102.") == RequirementSpan(CO, "ECON 101 and 102")
    assert _single("Prerequisite or Corequisite: ECON 481 and 482.") == RequirementSpan(CO, "ECON 481 and 482")
    assert _single("Prerequisites or corequisites: DES 493 and consent of Department.").kind is CO
    assert _single("Pour les étudiants du BEd/Ad : Préalable ou concomitant : EDU S 101. ") == RequirementSpan(
        CO, "EDU S 101"
    )


def test_sentence_following_a_corequisite_is_ignored():
    text = (
        "statements. Pre- or co-requisites: ECON 101 and 102. Students may not receive credit "
        "for both ACCTG 211 and ACCTG 311."
    )
    assert _extract(text) == [RequirementSpan(CO, "ECON 101 and 102")]


def test_prerequisite_then_corequisite():
    text = "Prerequisite: PHYS 124 (see Note following) or 144. Corequisite: MATH 118 or 146."
    assert _extract(text) == [
        RequirementSpan(PRE, "PHYS 124 (see Note following) or 144"),
        RequirementSpan(CO, "MATH 118 or 146"),
    ]


def test_notes_after_requirements_add_nothing():
    text = (
        "Prerequisites: Mathematics 30-1 and Physics 30. Mathematics 31 is strongly recommended. "
        "Corequisites: MATH 117 or 144. Note: MATH 113 or 114 is not acceptable as a co-requisite "
        "but may be used as a pre-requisite in place of MATH 117 or 144. Note: Credit may be "
        "obtained for only one of PHYS 124, 144, EN PH 131 or SCI 100. "
    )
    assert _extract(text) == [
        RequirementSpan(PRE, "Mathematics 30-1 and Physics 30"),
        RequirementSpan(CO, "MATH 117 or 144"),
    ]


def test_prerequisites_mentioned_mid_sentence_are_not_requirements():
    assert _extract(
        "Note: Consult the Department of Psychology's website for the specific topic(s) "
        "offered each year and any additional prerequisites. [Faculty of Arts]"
    ) == []


def test_extractor_is_reusable():
    extractor = RequirementExtractor()
    first = extractor.extract("Prerequisite: LAW 524")
    second = extractor.extract("Prerequisite: LAW 524")
    assert first == second == [RequirementSpan(PRE, "LAW 524")]

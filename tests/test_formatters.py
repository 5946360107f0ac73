import pytest

from screens.analytics import formatters as fmt


@pytest.mark.parametrize("value, expected", [(72.125, 72.13), (72.124, 72.12), (None, 0.0), ("81.5", 81.5)])
def test_round2(value, expected):
    assert fmt.round2(value) == expected


def test_percent_of():
    assert fmt.percent_of(1, 3) == 33
    assert fmt.percent_of(1, 8) == 13
    assert fmt.percent_of(5, 0) == 0
    assert fmt.percent_of(5, None) == 0


@pytest.mark.parametrize("score, level", [(95, "Excellent"), (90, "Excellent"), (75, "Good"),
                                          (60, "Average"), (59.9, "Needs Improvement")])
def test_performance_level(score, level):
    assert fmt.performance_level(score) == level


def test_trend_indicator():
    assert fmt.trend_indicator("Improving") == ("📈", "Improving")
    assert fmt.trend_indicator("declining") == ("📉", "Declining")
    assert fmt.trend_indicator(None) == ("⏺", "Stable")


def test_subject_performance_defaults_missing_rates():
    df = fmt.subject_performance({"Math": 71.456, "English": 64}, {"Math": {"pass_rate": 80, "fail_rate": 20}})
    math, english = df.to_dict("records")
    assert math == {"subject": "Math", "average": 71.46, "pass_rate": 80.0, "fail_rate": 20.0}
    assert english["pass_rate"] == 0.0
    assert english["fail_rate"] == 100.0


def test_grade_distribution_percentages():
    df = fmt.grade_distribution({"A": 3, "B": 5, "C": 2}, 10)
    assert df["percentage"].tolist() == [30, 50, 20]
    assert fmt.grade_distribution({}, 0).empty


def test_quartiles_rows():
    df = fmt.quartiles({"q1": 50, "q2": 62, "q3": 75}, 63.2)
    assert df["name"].tolist() == ["Q1", "Q2 (Median)", "Q3", "Average"]
    assert df["value"].tolist() == [50.0, 62.0, 75.0, 63.2]


def test_trends_are_sorted_by_month():
    df = fmt.performance_trends({"2024-03": {"average": 70, "count": 4}, "2024-01": {"average": 60, "count": 2}})
    assert df["month"].tolist() == ["2024-01", "2024-03"]
    assert df["assessments"].tolist() == [2, 4]


def test_pie_slices_share_of_total():
    df = fmt.pie_slices({"Pass": 3, "Fail": 1})
    assert df["percentage"].tolist() == [75, 25]


def test_comparison_best_first():
    df = fmt.comparison({"Form 1": {"average": 60, "students": 30}, "Form 2": {"average": 72.5, "students": 28}},
                        "students")
    assert df["name"].tolist() == ["Form 2", "Form 1"]
    assert df["students"].tolist() == [28, 30]


def test_streams_and_rankings():
    streams = [
        {"stream": "East", "classes": [{"class_name": "1E", "average_percentage": 55, "total_students": 20, "rank": 2}]},
        {"stream": "West", "classes": [{"class_name": "1W", "average_percentage": 68.333, "total_students": 25, "rank": 1}]},
    ]
    assert fmt.stream_names(streams) == ["East", "West"]
    assert len(fmt.filter_streams(streams, "all")) == 2
    assert [s["stream"] for s in fmt.filter_streams(streams, "West")] == ["West"]
    ranking = fmt.class_rankings(streams)
    assert ranking["class_name"].tolist() == ["1W", "1E"]
    assert ranking.loc[0, "average_percentage"] == 68.33
    assert ranking.loc[1, "stream"] == "East"


def test_subject_comparison_fills_difference():
    df = fmt.subject_comparison([
        {"subject": "Math", "student_marks": 80, "class_average": 70.5},
        {"subject": "English", "student_marks": 60, "class_average": 65, "difference": -5, "above_average": False},
    ])
    math, english = df.to_dict("records")
    assert math["difference"] == 9.5
    assert math["above_average"]
    assert english["difference"] == -5
    assert not english["above_average"]


# ─── Reports ────────────────────────────────────────────────────────

@pytest.mark.parametrize("average, grade", [(95, "A+"), (80, "A"), (69.99, "B"), (40, "C"), (20, "D"),
                                            (19.5, "F"), (None, "F")])
def test_letter_grade(average, grade):
    assert fmt.letter_grade(average) == grade


def test_top_students_marks_the_podium():
    group = {"class_name": "Form 1", "stream": "East", "students": [
        {"student_name": "Amy", "average": 88.456, "total": 442, "stream": "East", "position": 1},
        {"student_name": "Ben", "average": 80, "total": 400, "stream": "East", "position": 2},
        {"student_name": "Cal", "average": None, "total": 0, "stream": "East", "position": 4},
    ]}
    df = fmt.top_students(group)
    assert df["position"].tolist() == ["🥇 1", "🥈 2", "4"]
    assert df["average"].tolist() == [88.46, 80.0, 0.0]
    assert fmt.class_heading(group) == "Form 1 (East Stream)"
    assert fmt.class_heading({"class_name": "Form 2"}) == "Form 2"


def test_subject_champions_rows():
    df = fmt.subject_champions({"champions": [
        {"student_name": "Amy", "stream": "East", "marks": 97, "subject": "Mathematics"},
    ]})
    assert df.to_dict("records") == [{"subject": "Mathematics", "student_name": "Amy", "stream": "East",
                                      "marks": 97.0}]
    assert fmt.subject_champions({}).empty


def test_stream_ranking_sorted_by_position():
    df = fmt.stream_ranking({"class_level": "Form 1", "streams": [
        {"stream": "West", "class_name": "Form 1 West", "average": 55.5, "position": 2, "total_students": 30},
        {"stream": "East", "class_name": "Form 1 East", "average": 71.25, "position": 1, "total_students": 28},
    ]})
    assert df["stream"].tolist() == ["East", "West"]
    assert df["position"].tolist() == ["🥇 1", "🥈 2"]
    assert df["grade"].tolist() == ["B+", "C+"]
    assert fmt.stream_ranking({}).empty


def test_stream_breakdown_and_has_reports():
    df = fmt.stream_breakdown([{"stream": "East", "top_students": 3, "subject_champions": "5", "total_classes": 2}])
    assert df.iloc[0].to_dict() == {"stream": "East", "top_students": 3, "subject_champions": 5, "total_classes": 2}
    assert fmt.has_reports({"pie_chart_data": [{"stream": "East"}]})
    assert not fmt.has_reports({"message": "No data"})
    assert not fmt.has_reports(None)

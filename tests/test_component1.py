import numpy as np
import pandas as pd
import pytest


def _make_group_data(n=300, seed=0):
    rng = np.random.default_rng(seed)

    # Protected attribute with three levels, unevenly sized
    race = rng.choice(["White", "Black", "Asian"], size=n, p=[0.6, 0.3, 0.1])

    # Outcome and noisy scores with a group shift to create disparities
    y = rng.binomial(1, 0.4, size=n)
    shift = (race == "Black") * 0.1
    y_hat = np.clip(0.45 * y + 0.25 + shift + rng.normal(0, 0.2, size=n), 0, 1)
    return race, y, y_hat


def test_confusion_matrix_counts_known_values():
    import gftoolkit as gft

    probs = [0.9, 0.2, 0.7, 0.6, 0.1, 0.8, 0.3, 0.4]
    y = [1, 0, 0, 1, 0, 1, 1, 0]

    cm = gft.gm_confusion_matrix_counts(probs, y, cutoff=0.5)

    # preds: 1 0 1 1 0 1 0 0
    assert (cm.tp, cm.fp, cm.tn, cm.fn) == (3, 1, 3, 1)
    assert cm.n == len(y)
    assert cm.as_dict() == {"TP": 3, "FP": 1, "TN": 3, "FN": 1}


def test_probability_equal_to_cutoff_is_predicted_positive():
    import gftoolkit as gft

    cm = gft.gm_confusion_matrix_counts([0.3, 0.3], [1, 0], cutoff=0.3)
    assert (cm.tp, cm.fp, cm.tn, cm.fn) == (1, 1, 0, 0)


def test_confusion_matrix_counts_rejects_bad_input():
    import gftoolkit as gft

    with pytest.raises(gft.InvalidInputError):
        gft.gm_confusion_matrix_counts([0.1, 0.2], [1], cutoff=0.5)

    with pytest.raises(gft.InvalidInputError):
        gft.gm_confusion_matrix_counts([0.1], [1], cutoff=1.5)

    with pytest.raises(gft.InvalidInputError):
        gft.gm_confusion_matrix_counts([0.1], [2], cutoff=0.5)


def test_group_confusion_matrices_cover_every_row():
    import gftoolkit as gft

    race, y, y_hat = _make_group_data(n=250, seed=1)
    protected = gft.ProtectedAttribute.from_values(race)
    cutoff = {"Asian": 0.4, "Black": 0.6, "White": 0.5}

    cms = gft.gm_group_confusion_matrices(protected, y_hat, y, cutoff)

    # Levels come back in sorted (categorical) order
    assert list(cms.keys()) == ["Asian", "Black", "White"]
    for level, cm in cms.items():
        assert cm.n == int((race == level).sum())

    # Each group is thresholded with its own cutoff
    mask = race == "Black"
    expected = gft.gm_confusion_matrix_counts(y_hat[mask], y[mask], cutoff=0.6)
    assert cms["Black"] == expected


def test_level_without_rows_gets_zero_matrix():
    import gftoolkit as gft

    protected = gft.ProtectedAttribute.from_values(["A", "A", "B"], levels=["A", "B", "C"])
    cutoff = {"A": 0.5, "B": 0.5, "C": 0.5}

    cms = gft.gm_group_confusion_matrices(protected, [0.9, 0.1, 0.6], [1, 0, 0], cutoff)

    assert cms["C"] == gft.ConfusionMatrix(tp=0, fp=0, tn=0, fn=0)
    gmm = gft.gm_group_metric_matrix(cms)
    assert gmm["C"].isna().all()


def test_group_confusion_matrices_length_mismatch_raises():
    import gftoolkit as gft

    protected = gft.ProtectedAttribute.from_values(["A", "B", "B"])
    with pytest.raises(gft.InvalidInputError):
        gft.gm_group_confusion_matrices(protected, [0.1, 0.2], [0, 1], {"A": 0.5, "B": 0.5})


def test_calculate_metrics_known_values():
    import gftoolkit as gft

    cm = gft.ConfusionMatrix(tp=3, fp=1, tn=4, fn=2)
    m = gft.gm_calculate_metrics(cm)

    assert list(m.index) == gft.METRICS
    assert m["TPR"] == pytest.approx(0.6)
    assert m["TNR"] == pytest.approx(0.8)
    assert m["PPV"] == pytest.approx(0.75)
    assert m["NPV"] == pytest.approx(4 / 6)
    assert m["FNR"] == pytest.approx(0.4)
    assert m["FPR"] == pytest.approx(0.2)
    assert m["FDR"] == pytest.approx(0.25)
    assert m["FOR"] == pytest.approx(2 / 6)
    assert m["TS"] == pytest.approx(0.5)
    assert m["STP"] == pytest.approx(0.4)
    assert m["ACC"] == pytest.approx(0.7)
    assert m["F1"] == pytest.approx(2 * 0.75 * 0.6 / 1.35)
    assert m["MCC"] == pytest.approx(10 / np.sqrt(600))


def test_zero_denominators_give_nan_not_errors():
    import gftoolkit as gft

    # Only negatives, all predicted negative
    m = gft.gm_calculate_metrics(gft.ConfusionMatrix(tp=0, fp=0, tn=5, fn=0))

    assert np.isnan(m["TPR"])
    assert np.isnan(m["PPV"])
    assert np.isnan(m["F1"])
    assert np.isnan(m["MCC"])
    assert m["TNR"] == 1.0
    assert m["ACC"] == 1.0
    assert m["STP"] == 0.0

    empty = gft.gm_calculate_metrics(gft.ConfusionMatrix(tp=0, fp=0, tn=0, fn=0))
    assert empty.isna().all()


def test_metrics_stay_in_range():
    import gftoolkit as gft

    race, y, y_hat = _make_group_data(n=400, seed=2)
    protected = gft.ProtectedAttribute.from_values(race)
    cms = gft.gm_group_confusion_matrices(protected, y_hat, y, {lvl: 0.5 for lvl in protected.levels})
    gmm = gft.gm_group_metric_matrix(cms)

    rates = gmm.drop(index="MCC").to_numpy().ravel()
    rates = rates[~np.isnan(rates)]
    assert ((rates >= 0) & (rates <= 1)).all()

    mcc = gmm.loc["MCC"].dropna()
    assert ((mcc >= -1) & (mcc <= 1)).all()


def test_parity_loss_sums_absolute_differences():
    import gftoolkit as gft

    gmm = pd.DataFrame(
        {"A": [0.5, 0.2], "B": [0.7, 0.2], "C": [0.1, np.nan]},
        index=["TPR", "FPR"],
    )
    loss = gft.gm_parity_loss(gmm, "A")

    assert loss["TPR"] == pytest.approx(0.2 + 0.4)
    # NaN is not skipped
    assert np.isnan(loss["FPR"])

    # The privileged group alone contributes nothing
    assert gft.gm_parity_loss(gmm[["A"]], "A")["TPR"] == 0.0


def test_perfectly_separated_groups_scenario():
    import gftoolkit as gft

    protected = gft.ProtectedAttribute.from_values(["A"] * 10 + ["B"] * 10)
    y = np.array([1] * 10 + [0] * 10)
    explainer = gft.ModelExplainer(label="perfect", y=y, y_hat=y.astype(float))

    res = gft.gm_evaluate_group_fairness(explainer, protected, "A", {"A": 0.5, "B": 0.5})

    assert res.confusion_matrices["A"] == gft.ConfusionMatrix(tp=10, fp=0, tn=0, fn=0)
    assert res.confusion_matrices["B"] == gft.ConfusionMatrix(tp=0, fp=0, tn=10, fn=0)
    assert res.group_metric_matrix.loc["TPR", "A"] == 1.0
    assert np.isnan(res.group_metric_matrix.loc["TPR", "B"])
    assert np.isnan(res.parity_loss["TPR"])
    assert res.n_nan > 0


def test_pipeline_is_deterministic():
    import gftoolkit as gft

    race, y, y_hat = _make_group_data(n=200, seed=3)
    protected = gft.ProtectedAttribute.from_values(race)
    explainer = gft.ModelExplainer(label="m", y=y, y_hat=y_hat)
    cutoff = {lvl: 0.5 for lvl in protected.levels}

    first = gft.gm_evaluate_group_fairness(explainer, protected, "White", cutoff)
    second = gft.gm_evaluate_group_fairness(explainer, protected, "White", cutoff)

    pd.testing.assert_frame_equal(first.group_metric_matrix, second.group_metric_matrix)
    pd.testing.assert_series_equal(first.parity_loss, second.parity_loss)


def test_protected_attribute_levels_and_equality():
    import gftoolkit as gft

    a = gft.ProtectedAttribute.from_values(["m", "f", "f", "m"])
    assert a.levels == ["f", "m"]
    assert len(a) == 4

    # Existing categorical order is kept
    cat = pd.Categorical(["m", "f"], categories=["m", "f"])
    b = gft.ProtectedAttribute.from_values(cat)
    assert b.levels == ["m", "f"]

    # Non-string values become string levels
    c = gft.ProtectedAttribute.from_values([1, 0, 1])
    assert c.levels == ["0", "1"]

    assert a.equals(gft.ProtectedAttribute.from_values(["m", "f", "f", "m"]))
    assert not a.equals(gft.ProtectedAttribute.from_values(["m", "f", "m", "m"]))
    assert not a.equals(gft.ProtectedAttribute.from_values(["m", "f", "f"]))

    with pytest.raises(gft.InvalidLevelError):
        gft.ProtectedAttribute.from_values(["a", None])


def test_model_explainer_validates_arrays():
    import gftoolkit as gft

    e = gft.ModelExplainer(label=3, y=[0, 1], y_hat=[0.2, 0.8])
    assert e.label == "3"
    assert e.labels() == ("3",)
    assert e.all_explainers() == (e,)

    with pytest.raises(gft.InconsistentTargetError):
        gft.ModelExplainer(label="x", y=[0, 1, 1], y_hat=[0.2, 0.8])

    # 2-D input is not flattened
    with pytest.raises(gft.InconsistentTargetError):
        gft.ModelExplainer(label="x", y=[[0, 1], [1, 0]], y_hat=[[0.2, 0.8], [0.6, 0.1]])

    with pytest.raises(gft.InvalidInputError):
        gft.ModelExplainer(label="x", y=[0, 3], y_hat=[0.2, 0.8])


def test_protected_levels_that_collide_as_text_raise():
    import gftoolkit as gft

    with pytest.raises(gft.InvalidLevelError):
        gft.ProtectedAttribute.from_values([1, "1", 1])


def test_match_level_uses_original_values():
    import gftoolkit as gft

    protected = gft.ProtectedAttribute.from_values(np.array([0.0, 0.0, 1.0, 1.0]))
    assert protected.levels == ["0.0", "1.0"]
    assert protected.match_level(0) == "0.0"
    assert protected.match_level(1.0) == "1.0"
    assert protected.match_level("1.0") == "1.0"
    assert protected.match_level(2) is None

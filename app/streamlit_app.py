import streamlit as st

from cardiorisk import config
from cardiorisk.controller import AssessmentFormController
from cardiorisk.display import (
    DISCLAIMER, EMPTY_HISTORY, INTERPRETATION, describe_outcome, format_confidence,
    history_count_label, percent, risk_label, risk_tone, summarize_entry,
)
from cardiorisk.history import HistoryStore, SessionStateBackend
from cardiorisk.predictor import PredictorClient
from cardiorisk.schemas import CHOICE_LABELS

config.configure_logging()

st.set_page_config(page_title="CardioRisk", page_icon="❤️", layout="wide")
st.title("Cardiovascular Risk Assessment ❤️")
st.caption("Advanced cardiovascular risk assessment using machine learning technology")

# --- Initial state ---
store = HistoryStore(SessionStateBackend(st.session_state))
if "controller" not in st.session_state:
    st.session_state.controller = AssessmentFormController(PredictorClient(), store)
ctrl: AssessmentFormController = st.session_state.controller
ctrl.history = store

notifications = []
ctrl.notify = notifications.append


class HistoryPanel:
    def __init__(self, store: HistoryStore):
        self.entries = store.entries

    def refresh(self, store: HistoryStore) -> None:
        self.entries = store.entries


def _labels(field):
    return list(CHOICE_LABELS[field])


def _field_error(field):
    msg = ctrl.errors.get(field)
    if msg:
        st.caption(f":red[{msg}]")


panel = HistoryPanel(store)
form_col, history_col = st.columns([2, 1])

with store.subscribe(panel.refresh):
    # --- Form ---
    with form_col:
        st.subheader("Risk Assessment Form")
        with st.form("assessment"):
            st.markdown("**Basic Information**")
            c1, c2, c3, c4 = st.columns(4)
            with c1:
                age = st.number_input("Age (days)", value=None, step=1, placeholder="e.g., 9125",
                                      help="Age in days since birth (e.g., 25 years = ~9125 days)")
                _field_error("age")
            with c2:
                gender = st.selectbox("Gender", ["Female", "Male"], index=1)
                _field_error("gender")
            with c3:
                height = st.number_input("Height (cm)", value=None, step=1, placeholder="e.g., 170",
                                         help="Height in centimeters")
                _field_error("height")
            with c4:
                weight = st.number_input("Weight (kg)", value=None, step=1, placeholder="e.g., 70",
                                         help="Weight in kilograms")
                _field_error("weight")

            st.markdown("**Medical Measurements**")
            c5, c6 = st.columns(2)
            with c5:
                systolic_bp = st.number_input(
                    "Systolic BP (mmHg)", value=None, step=1, placeholder="e.g., 120",
                    help="Systolic blood pressure (upper number, e.g., 120 in 120/80)")
                _field_error("systolic_bp")
            with c6:
                diastolic_bp = st.number_input(
                    "Diastolic BP (mmHg)", value=None, step=1, placeholder="e.g., 80",
                    help="Diastolic blood pressure (lower number, e.g., 80 in 120/80)")
                _field_error("diastolic_bp")

            st.markdown("**Laboratory Values**")
            c7, c8 = st.columns(2)
            with c7:
                cholesterol = st.selectbox("Cholesterol Level", _labels("cholesterol"))
                _field_error("cholesterol")
            with c8:
                glucose = st.selectbox("Glucose Level", _labels("glucose"))
                _field_error("glucose")

            st.markdown("**Lifestyle Factors**")
            c9, c10, c11 = st.columns(3)
            with c9:
                smoker = st.selectbox("Smoking", _labels("smoker"))
                _field_error("smoker")
            with c10:
                alcohol = st.selectbox("Alcohol Consumption", _labels("alcohol"))
                _field_error("alcohol")
            with c11:
                active = st.selectbox("Physical Activity", _labels("physically_active"), index=1)
                _field_error("physically_active")

            submitted = st.form_submit_button(
                "Assess Cardiovascular Risk", disabled=ctrl.in_flight)

        # --- Action: assess risk ---
        if submitted:
            form = {
                "age": age,
                "gender": gender,
                "height": height,
                "weight": weight,
                "systolic_bp": systolic_bp,
                "diastolic_bp": diastolic_bp,
                "cholesterol": cholesterol,
                "glucose": glucose,
                "smoker": smoker,
                "alcohol": alcohol,
                "physically_active": active,
            }
            with st.spinner("Analyzing Risk..."):
                ctrl.submit(form)
            if ctrl.errors:
                st.rerun()

        for n in notifications:
            if n.level == "error":
                st.error(f"**{n.title}**: {n.message}")
            else:
                st.toast(f"{n.title}: {n.message}")

        # --- Result ---
        pred = ctrl.result
        if pred:
            st.subheader("Risk Assessment Result")
            r1, r2 = st.columns(2)
            r1.metric("Risk Level", f"{risk_label(pred)} Risk")
            r2.metric("Confidence", format_confidence(pred.confidence))
            st.progress(percent(pred.confidence))
            tone = risk_tone(pred)
            show = {"danger": st.error, "warning": st.warning, "success": st.success, "info": st.info}[tone]
            show(INTERPRETATION[pred.risk_class])
            st.caption(describe_outcome(pred))
            st.caption(DISCLAIMER)

    # --- History ---
    with history_col:
        st.subheader("Prediction History")
        if st.button("Clear", disabled=len(panel.entries) == 0):
            store.clear()

        if not panel.entries:
            st.info(EMPTY_HISTORY)
        else:
            st.caption(history_count_label(len(panel.entries)))
            for entry in panel.entries:
                s = summarize_entry(entry)
                with st.container(border=True):
                    h1, h2 = st.columns(2)
                    h1.caption(s["when"])
                    if s["high_risk"]:
                        h2.markdown(f":red[**{s['badge']}**]")
                    else:
                        h2.markdown(f":green[**{s['badge']}**]")
                    st.caption(f"{s['age']} · {s['gender']}")
                    st.caption(f"{s['bp']} · {s['bmi']}")

import os
import requests
import pandas as pd
import streamlit as st
from datetime import date

API_BASE_DEFAULT = os.getenv("API_BASE", "http://127.0.0.1:8000")

st.set_page_config(page_title="Herd Production Analytics", layout="wide")
st.title("🐄 Herd Production Analytics")
st.caption("Animals, stables and vaccinations, with production estimates for animals that were never weighed.")

with st.sidebar:
    st.header("API")
    api_base = st.text_input("API Base URL", API_BASE_DEFAULT)
    st.caption("If using Docker Compose, this should already be set.")

def get_json(url: str):
    r = requests.get(url, timeout=25)
    r.raise_for_status()
    return r.json()

def post_json(url: str, payload: dict):
    r = requests.post(url, json=payload, timeout=30)
    r.raise_for_status()
    return r.json()

def delete_json(url: str):
    r = requests.delete(url, timeout=30)
    r.raise_for_status()
    return r.json()

# Load lookups
try:
    stables = get_json(f"{api_base}/stables")
    bovines = get_json(f"{api_base}/bovines")
    stable_names = {s["id"]: s["name"] for s in stables}
    bovine_names = {b["id"]: b["name"] for b in bovines}
except Exception as e:
    st.error(f"Could not fetch herd from API: {e}")
    st.stop()

tabs = st.tabs(["Production", "Herd", "Add Bovine", "Stables", "Vaccines"])

# --------------------
# Production analytics
# --------------------
with tabs[0]:
    st.subheader("Production Analytics")
    mode = st.radio("Time scale", ["daily", "monthly", "yearly"], horizontal=True)

    try:
        report = get_json(f"{api_base}/analytics/production?mode={mode}")
    except Exception as e:
        st.error(f"Could not load analytics: {e}")
        report = None

    if report is not None:
        if not report.get("data_available", True):
            st.warning("Herd data is currently unavailable.")
        elif report["herd_size"] == 0:
            st.info("Start by adding bovines to see production calculations.")
        else:
            m1, m2, m3, m4 = st.columns(4)
            m1.metric("Meat (kg total)", f"{report['meat_total']:,.0f}")
            m2.metric(f"Milk (L, {mode})", f"{report['milk_production']:,}")
            m3.metric("Average weight (kg)", report["average_weight"])
            m4.metric("Estimated value ($)", f"{report['estimated_value']:,}")

            c1, c2 = st.columns(2)
            with c1:
                st.markdown("#### Average weight by breed")
                dfB = pd.DataFrame(report["breed_distribution"])
                st.bar_chart(dfB.set_index("breed")[["average_weight"]])
                st.dataframe(dfB, use_container_width=True)
            with c2:
                st.markdown("#### Gender distribution")
                dfG = pd.DataFrame(report["gender_distribution"])
                st.bar_chart(dfG.set_index("gender")[["count"]])

            c3, c4, c5 = st.columns(3)
            with c3:
                st.markdown("#### Age groups (years)")
                dfA = pd.DataFrame(report["age_distribution"])
                st.bar_chart(dfA.set_index("age_group")[["count"]])
            with c4:
                st.markdown("#### Top stables")
                dfS = pd.DataFrame(report["stable_distribution"])
                if dfS.empty:
                    st.info("No stable assignments.")
                else:
                    st.bar_chart(dfS.set_index("stable")[["count"]])
            with c5:
                st.markdown("#### Top vaccine types")
                dfV = pd.DataFrame(report["vaccine_distribution"])
                if dfV.empty:
                    st.info("No vaccinations recorded.")
                else:
                    st.bar_chart(dfV.set_index("type")[["count"]])

            st.markdown("#### Top 5 heaviest")
            dfT = pd.DataFrame(report["top_heaviest"])
            st.dataframe(
                dfT[["id", "name", "breed", "gender", "age_years", "effective_weight", "estimated"]],
                use_container_width=True,
            )
            st.caption("Weights flagged as estimated come from breed, gender and age heuristics.")

# --------------------
# Herd
# --------------------
with tabs[1]:
    st.subheader("Herd")
    df = pd.DataFrame(bovines)
    if df.empty:
        st.info("No bovines registered.")
    else:
        df["stable"] = df["stable_id"].map(stable_names)
        st.dataframe(df, use_container_width=True)
        st.download_button(
            "Download herd CSV",
            df.to_csv(index=False).encode("utf-8"),
            file_name="herd.csv",
            mime="text/csv",
        )

        st.divider()
        choice = st.selectbox("Bovine", options=list(bovine_names), format_func=lambda i: f"{i} - {bovine_names[i]}")
        if choice:
            try:
                est = get_json(f"{api_base}/bovines/{choice}/estimate")
                e1, e2, e3 = st.columns(3)
                e1.metric("Age (years)", est["age_years"])
                e2.metric("Weight (kg)", est["effective_weight"], "estimated" if est["estimated"] else "recorded")
                e3.metric("Milk (L/day)", est["milk_liters_per_day"])
                vacc = get_json(f"{api_base}/vaccines/bovine/{choice}")
                if vacc:
                    st.markdown("#### Vaccinations")
                    st.dataframe(pd.DataFrame(vacc), use_container_width=True)
            except Exception as e:
                st.warning(f"Could not load bovine details: {e}")

            if st.button("Delete bovine"):
                try:
                    st.success(delete_json(f"{api_base}/bovines/{choice}"))
                except Exception as e:
                    st.error(f"Delete failed: {e}")

# --------------------
# Add Bovine
# --------------------
with tabs[2]:
    st.subheader("Register New Bovine")
    with st.form("bovine_form"):
        name = st.text_input("Name", value="")
        gender = st.selectbox("Gender", ["Female", "Male"])
        breed = st.text_input("Breed", value="Holstein")
        birth_date = st.date_input("Birth date", value=date(2021, 1, 1))
        weight = st.number_input("Weight (kg, 0 if unknown)", min_value=0.0, value=0.0)
        stable_id = st.selectbox(
            "Stable",
            options=[None] + list(stable_names),
            format_func=lambda i: "(none)" if i is None else stable_names[i],
        )
        submitted = st.form_submit_button("Create bovine")

    if submitted:
        try:
            payload = {
                "name": name.strip(),
                "gender": gender,
                "breed": breed.strip(),
                "birth_date": birth_date.isoformat(),
                "weight": float(weight) if weight > 0 else None,
                "stable_id": stable_id,
            }
            resp = post_json(f"{api_base}/bovines", payload)
            st.success(resp)
            st.info("Refresh the page to see the bovine in dropdowns.")
        except Exception as e:
            st.error(f"Create bovine failed: {e}")

# --------------------
# Stables
# --------------------
with tabs[3]:
    st.subheader("Stables")
    dfSt = pd.DataFrame(stables)
    if dfSt.empty:
        st.info("No stables yet.")
    else:
        st.dataframe(dfSt, use_container_width=True)

    with st.form("stable_form"):
        st_name = st.text_input("Stable name", value="")
        st_limit = st.number_input("Capacity limit", min_value=1, value=20)
        st_location = st.text_input("Location", value="")
        submitted = st.form_submit_button("Create stable")

    if submitted:
        try:
            resp = post_json(f"{api_base}/stables", {
                "name": st_name.strip(),
                "limit": int(st_limit),
                "location": st_location.strip() or None,
            })
            st.success(resp)
        except Exception as e:
            st.error(f"Create stable failed: {e}")

# --------------------
# Vaccines
# --------------------
with tabs[4]:
    st.subheader("Vaccinations")
    try:
        vaccines = get_json(f"{api_base}/vaccines")
        dfVa = pd.DataFrame(vaccines)
        if dfVa.empty:
            st.info("No vaccinations recorded.")
        else:
            dfVa["bovine"] = dfVa["bovine_id"].map(bovine_names)
            st.dataframe(dfVa, use_container_width=True)
    except Exception as e:
        st.warning(f"Could not load vaccinations: {e}")

    if bovine_names:
        with st.form("vaccine_form"):
            v_bovine = st.selectbox("Bovine", options=list(bovine_names), format_func=lambda i: bovine_names[i])
            v_name = st.text_input("Vaccine name", value="")
            v_type = st.text_input("Vaccine type", value="Aftosa")
            v_date = st.date_input("Application date", value=date.today())
            submitted = st.form_submit_button("Record vaccination")

        if submitted:
            try:
                resp = post_json(f"{api_base}/vaccines", {
                    "bovine_id": v_bovine,
                    "name": v_name.strip(),
                    "vaccine_type": v_type.strip(),
                    "vaccine_date": v_date.isoformat(),
                })
                st.success(resp)
            except Exception as e:
                st.error(f"Record vaccination failed: {e}")

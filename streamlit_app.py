"""
Streamlit UI for the Movie List Uploader.
Upload a .txt file of movie titles (one per line), look each title up on TMDb,
browse/remove the results, then save the final list to the configured endpoint.

Run UI:                streamlit run streamlit_app.py
"""

# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives
# Typing to make function signatures clearer
from typing import Optional  # indicates values can be None

# Local package imports
from movie_uploader.config import Settings  # env/.env configuration
from movie_uploader.errors import EmptyCollectionError, MovieUploaderError  # errors carrying user-facing messages
from movie_uploader.models import MovieRecord  # resolved movie
from movie_uploader.uploader import MovieUploader  # session facade

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v="  # trailer keys are YouTube ids

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="TMDB Movie Uploader", layout="wide")  # wide layout

# Main page title
st.title("🎬 TMDB Movie Uploader")  # header


def get_uploader() -> Optional[MovieUploader]:
	"""Return this browser session's MovieUploader, creating it on first use."""
	if "uploader" not in st.session_state:
		try:
			settings = Settings.from_env()  # read TMDB_API_KEY etc.
			st.session_state["uploader"] = MovieUploader.from_settings(settings)  # wire clients
		except MovieUploaderError as e:
			st.error(e.user_message)  # e.g. missing API key
			return None
	return st.session_state["uploader"]


def render_movie(position: int, movie: MovieRecord, uploader: MovieUploader):
	"""Render one result card with a remove button."""
	with st.container(border=True):
		if movie.poster_url:
			st.image(movie.poster_url, width="stretch")  # poster
		st.subheader(movie.title)  # title
		st.caption(f"Rating: {movie.rating if movie.rating is not None else 'N/A'} / 10")  # score
		st.write(f"**Director:** {movie.director or 'N/A'}")
		st.write(f"**Release:** {movie.release_date or 'N/A'}")
		st.write(f"**Genres:** {', '.join(movie.genres) if movie.genres else 'N/A'}")
		if movie.actors:
			st.write(f"**Cast:** {', '.join(movie.actors)}")
		if movie.runtime:
			st.write(f"**Runtime:** {movie.runtime} min")
		if movie.trailer_key:
			st.markdown(f"[Watch trailer]({YOUTUBE_WATCH_URL}{movie.trailer_key})")
		# Widget keys must be unique; ids may repeat so include the position
		if st.button("🗑️ Remove", key=f"remove-{position}-{movie.id}"):
			uploader.remove(movie.id)  # drop from collection
			st.session_state["notice"] = ("success", "Movie removed successfully.")
			st.rerun()  # redraw without the card


uploader = get_uploader()  # None when misconfigured
if uploader is None:
	st.stop()  # nothing else works without settings

# Notices queued before a rerun are shown once
notice = st.session_state.pop("notice", None)
if notice:
	kind, text = notice
	getattr(st, kind)(text)  # st.success / st.warning / st.error

# File upload: parse only when a new file is picked, so reruns keep the results
uploaded = st.file_uploader("Upload .txt File", type=["txt"])
if uploaded is not None:
	# file_id changes on every new upload, even with the same name and size
	uploader.load_upload(uploaded.file_id, uploaded.getvalue())  # bytes -> title list

if uploader.titles:
	st.header("Movie Titles")  # section label
	with st.container(border=True):
		for title in uploader.titles:
			st.write(title)  # one row per title

	# One button: search first, save once results exist
	has_results = len(uploader.collection) > 0
	label = "Save Data" if has_results else "Search Movies"
	if st.button(label, type="primary"):
		if has_results:
			try:
				uploader.save()  # single POST to the sink
				st.success("Data saved successfully!")
			except EmptyCollectionError as e:
				st.warning(e.user_message)  # nothing left to save
			except MovieUploaderError as e:
				st.error(e.user_message)  # rejected / no response / not sent
		else:
			with st.spinner("Searching..."):
				try:
					report = uploader.search()  # concurrent TMDb lookups
					if report.failures or report.not_found:
						st.session_state["last_issues"] = (
							[f.query for f in report.failures],
							list(report.not_found),
						)
					st.rerun()  # redraw with results and the "Save Data" label
				except MovieUploaderError as e:
					st.error(e.user_message)  # no titles or batch failure

	# Per-title problems from the last search
	issues = st.session_state.pop("last_issues", None)
	if issues:
		failed, not_found = issues
		for title in failed:
			st.error(f'Error fetching data for "{title}"')
		if not_found:
			st.warning(f"No TMDb match for: {', '.join(not_found)}")

if len(uploader.collection) > 0:
	st.header("Movie Results")  # section label
	cols = st.columns(3)  # card grid
	for i, movie in enumerate(uploader.collection):
		with cols[i % 3]:
			render_movie(i, movie, uploader)

import logging
import streamlit as st

from client.client.api import PostService
from client.client.config import API_BASE_URL
from client.client.controller import PostManager
from client.client.utils import format_date_time, render_markdown


logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger('postboard.client.main')

# Configuración de la página
st.set_page_config(
    page_title="Postboard",
    page_icon="📝",
    layout="wide",
)


@st.cache_resource
def get_service():
    logger.info(f'Using API at {API_BASE_URL}')
    return PostService(API_BASE_URL)


def get_manager() -> PostManager:
    return PostManager(get_service(), st.session_state.get('view_state'))


def run_action(name, *args):
    """Runs a controller action and stores the resulting view state."""
    manager = get_manager()
    getattr(manager, name)(*args)
    st.session_state['view_state'] = manager.state


def on_field_change(name, widget_key):
    run_action('change_field', name, st.session_state[widget_key])


# First render: load the list
if 'view_state' not in st.session_state:
    run_action('load', 1)


def sidebar():
    with st.sidebar:
        st.markdown("# 📝 Postboard")
        st.caption(API_BASE_URL)
        st.markdown("---")

        if st.button('🔌 Test connection', use_container_width=True):
            if get_manager().check_connection():
                st.success('✅ **The API is reachable**')
            else:
                st.error('❌ **The API is not reachable**')


@st.fragment(run_every=1.0)
def messages():
    # Success messages clear themselves once their time is up
    run_action('expire_messages')
    state = st.session_state['view_state']

    if state.success_message:
        st.success(f'✅ {state.success_message}')
    if state.error:
        st.error(f'❌ {state.error}')


def post_form(state):
    rev = state.form_revision
    form = state.form_data

    st.markdown("## ✏️ Edit post" if state.is_editing else "## ➕ Create a new post")

    st.text_input(
        "Title *",
        value=form['title'],
        max_chars=255,
        placeholder="Post title",
        key=f'title_{rev}',
        on_change=on_field_change,
        args=('title', f'title_{rev}'),
    )
    st.text_area(
        "Content *",
        value=form['content'],
        height=140,
        placeholder="Write the post content (markdown supported)",
        key=f'content_{rev}',
        on_change=on_field_change,
        args=('content', f'content_{rev}'),
    )
    st.text_input(
        "Author *",
        value=form['author'],
        max_chars=255,
        placeholder="Author name",
        key=f'author_{rev}',
        on_change=on_field_change,
        args=('author', f'author_{rev}'),
    )
    st.checkbox(
        "Publish the post",
        value=form['is_published'],
        key=f'is_published_{rev}',
        on_change=on_field_change,
        args=('is_published', f'is_published_{rev}'),
    )

    col1, col2, _ = st.columns([1, 1, 3])
    with col1:
        if state.loading:
            label = '⏳ Loading...'
        else:
            label = '💾 Update' if state.is_editing else '➕ Create'
        st.button(label, type="primary", use_container_width=True,
                  disabled=state.loading, on_click=run_action, args=('submit',))
    with col2:
        if state.is_editing:
            st.button('❌ Cancel', use_container_width=True, on_click=run_action, args=('cancel_edit',))


def show_post(post, state):
    with st.container(border=True):
        if post['is_published']:
            st.caption('✅ Published')
        else:
            st.caption('📝 Draft')

        st.markdown(f"### {post['title']}")
        st.markdown(render_markdown(post['content']), unsafe_allow_html=True)
        st.caption(f"👤 By {post['author']} · 📅 {format_date_time(post['created_at'])}")

        if state.pending_delete_id == post['id']:
            st.warning('Are you sure you want to delete this post?')
            col1, col2, _ = st.columns([1, 1, 3])
            with col1:
                st.button('🗑️ Yes, delete', key=f"confirm_delete_{post['id']}", type="primary",
                          use_container_width=True, disabled=state.loading,
                          on_click=run_action, args=('confirm_delete',))
            with col2:
                st.button('Keep it', key=f"dismiss_delete_{post['id']}", use_container_width=True,
                          on_click=run_action, args=('dismiss_delete',))
            return

        col1, col2, _ = st.columns([1, 1, 3])
        with col1:
            st.button('✏️ Edit', key=f"edit_{post['id']}", use_container_width=True,
                      disabled=state.loading, on_click=run_action, args=('edit', post))
        with col2:
            st.button('🗑️ Delete', key=f"delete_{post['id']}", use_container_width=True,
                      disabled=state.loading, on_click=run_action, args=('request_delete', post['id']))


def posts_list(state):
    st.markdown(f"## 📚 Posts ({state.total})")

    if state.loading:
        st.info('⏳ Loading...')
        return

    if not state.posts:
        st.info("📭 **No posts yet.** Create the first one!")
        return

    for post in state.posts:
        show_post(post, state)

    if state.last_page > 1:
        col1, col2, col3 = st.columns([1, 2, 1])
        with col1:
            st.button('⬅️ Previous', use_container_width=True, disabled=state.page <= 1,
                      on_click=run_action, args=('change_page', state.page - 1))
        with col2:
            st.caption(f'Page {state.page} of {state.last_page}')
        with col3:
            st.button('Next ➡️', use_container_width=True, disabled=state.page >= state.last_page,
                      on_click=run_action, args=('change_page', state.page + 1))


sidebar()

st.markdown('# 📝 Post manager')
st.markdown('### Create, edit and delete posts')
st.markdown("---")

messages()

view_state = st.session_state['view_state']
post_form(view_state)
st.markdown("---")
posts_list(view_state)

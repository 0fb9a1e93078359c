import unittest

from fastapi.testclient import TestClient
from sqlalchemy import func, select

from thoughttrail.app import create_app
from thoughttrail.config import DEFAULT_SECRET_ACCESS_KEY, Settings
from thoughttrail.db import DbClient
from thoughttrail.dependencies import (
    get_db_client,
    get_identity_verifier,
    get_storage_client,
)
from thoughttrail.identity import InMemoryIdentityVerifier
from thoughttrail.models import BlogRow, NotificationRow, UserRow
from thoughttrail.security import PASSWORD_RULE_MESSAGE
from thoughttrail.storage import InMemoryStorageClient

PASSWORD = "Secret12"
CONTENT = {"blocks": [{"type": "paragraph", "data": {"text": "hello"}}]}


class BlogApiTests(unittest.TestCase):
    def setUp(self):
        self.app = create_app()
        self.db = DbClient()
        self.storage = InMemoryStorageClient()
        self.verifier = InMemoryIdentityVerifier()
        self.app.dependency_overrides[get_db_client] = lambda: self.db
        self.app.dependency_overrides[get_storage_client] = lambda: self.storage
        self.app.dependency_overrides[get_identity_verifier] = lambda: self.verifier
        self.client = TestClient(self.app)

    def count(self, row_cls, *where) -> int:
        with self.db.Session() as session:
            return session.execute(
                select(func.count()).select_from(row_cls).where(*where)
            ).scalar_one()

    def signup(self, email="jane@example.com", fullname="Jane Writer", password=PASSWORD):
        response = self.client.post(
            "/signup",
            json={"fullname": fullname, "email": email, "password": password},
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def auth(self, user) -> dict:
        return {"Authorization": f"Bearer {user['access_token']}"}

    def publish(self, user, title="Hello World", **overrides) -> str:
        body = {
            "title": title,
            "des": "A short description",
            "banner": "https://example.test/banner.jpeg",
            "content": CONTENT,
            "tags": ["Python", "web"],
            "draft": False,
        }
        body.update(overrides)
        response = self.client.post("/create-blog", json=body, headers=self.auth(user))
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["id"]

    def blog_pk(self, slug: str) -> str:
        response = self.client.post("/get-blog", json={"blog_id": slug, "mode": "edit"})
        return response.json()["blog"]["id"]

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def test_signup_returns_token_and_profile(self):
        user = self.signup()
        self.assertTrue(user["access_token"])
        self.assertEqual(user["username"], "jane")
        self.assertEqual(user["fullname"], "jane writer")
        self.assertIn("dicebear", user["profile_img"])

    def test_signup_with_duplicate_email_conflicts(self):
        self.signup()
        response = self.client.post(
            "/signup",
            json={"fullname": "Other Jane", "email": "JANE@example.com", "password": PASSWORD},
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json(), {"error": "Email already exists"})
        self.assertEqual(self.count(UserRow), 1)

    def test_signup_username_collision_gets_suffix(self):
        self.signup(email="jane@example.com")
        other = self.signup(email="jane@example.org")
        self.assertNotEqual(other["username"], "jane")
        self.assertTrue(other["username"].startswith("jane"))

    def test_signup_validation_messages(self):
        cases = [
            ({"fullname": "Jo", "email": "jo@example.com", "password": PASSWORD},
             "Fullname must be at least 3 letters long"),
            ({"fullname": "Joanna", "email": "", "password": PASSWORD}, "Enter Email"),
            ({"fullname": "Joanna", "email": "not-an-email", "password": PASSWORD},
             "Email is invalid"),
            ({"fullname": "Joanna", "email": "jo@example.com", "password": "weak"},
             PASSWORD_RULE_MESSAGE),
        ]
        for body, message in cases:
            response = self.client.post("/signup", json=body)
            self.assertEqual(response.status_code, 403)
            self.assertEqual(response.json()["error"], message)
        self.assertEqual(self.count(UserRow), 0)

    def test_signin(self):
        self.signup()
        ok = self.client.post("/signin", json={"email": "jane@example.com", "password": PASSWORD})
        self.assertEqual(ok.status_code, 200)
        self.assertEqual(ok.json()["username"], "jane")

        wrong = self.client.post("/signin", json={"email": "jane@example.com", "password": "Nope1234"})
        self.assertEqual(wrong.status_code, 403)
        self.assertEqual(wrong.json()["error"], "Incorrect password")

        missing = self.client.post("/signin", json={"email": "who@example.com", "password": PASSWORD})
        self.assertEqual(missing.status_code, 403)
        self.assertEqual(missing.json()["error"], "Email not found")

    def test_google_auth_creates_user_once(self):
        self.verifier.register(
            "google-token", "sam@gmail.com", "Sam Google", "https://lh3.test/photo=s96-c"
        )
        first = self.client.post("/google-auth", json={"access_token": "google-token"})
        self.assertEqual(first.status_code, 200, first.text)
        self.assertEqual(first.json()["profile_img"], "https://lh3.test/photo=s384-c")
        second = self.client.post("/google-auth", json={"access_token": "google-token"})
        self.assertEqual(second.status_code, 200)
        self.assertEqual(second.json()["username"], first.json()["username"])
        self.assertEqual(self.count(UserRow), 1)

        signin = self.client.post("/signin", json={"email": "sam@gmail.com", "password": PASSWORD})
        self.assertEqual(signin.status_code, 403)
        self.assertEqual(
            signin.json()["error"],
            "Account was created using google. Try logging in with google.",
        )

    def test_google_auth_rejects_password_account(self):
        self.signup(email="jane@gmail.com")
        self.verifier.register("google-token", "jane@gmail.com", "Jane")
        response = self.client.post("/google-auth", json={"access_token": "google-token"})
        self.assertEqual(response.status_code, 403)
        self.assertIn("signed up without google", response.json()["error"])
        self.assertEqual(self.count(UserRow), 1)

    def test_google_auth_rejects_unknown_token(self):
        response = self.client.post("/google-auth", json={"access_token": "forged"})
        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.count(UserRow), 0)

    def test_change_password(self):
        user = self.signup()
        wrong = self.client.post(
            "/change-password",
            json={"current_password": "Wrong123", "new_password": "Newpass1"},
            headers=self.auth(user),
        )
        self.assertEqual(wrong.status_code, 403)
        self.assertEqual(wrong.json()["error"], "Incorrect current password")

        ok = self.client.post(
            "/change-password",
            json={"current_password": PASSWORD, "new_password": "Newpass1"},
            headers=self.auth(user),
        )
        self.assertEqual(ok.status_code, 200)
        self.assertEqual(ok.json(), {"status": "password changed"})
        signin = self.client.post("/signin", json={"email": "jane@example.com", "password": "Newpass1"})
        self.assertEqual(signin.status_code, 200)

    def test_protected_route_requires_valid_token(self):
        missing = self.client.get("/get-upload-url")
        self.assertEqual(missing.status_code, 401)
        self.assertEqual(missing.json(), {"error": "No access token"})

        user = self.signup()
        tampered = self.client.get(
            "/get-upload-url",
            headers={"Authorization": f"Bearer {user['access_token']}x"},
        )
        self.assertEqual(tampered.status_code, 401)
        self.assertEqual(tampered.json(), {"error": "Access token is invalid"})

    def test_get_upload_url(self):
        user = self.signup()
        response = self.client.get("/get-upload-url", headers=self.auth(user))
        self.assertEqual(response.status_code, 200)
        url = response.json()["uploadURL"]
        self.assertEqual(len(self.storage.issued), 1)
        self.assertTrue(self.storage.issued[0].endswith(".jpeg"))
        self.assertIn(self.storage.issued[0], url)

    # ------------------------------------------------------------------
    # Blogs
    # ------------------------------------------------------------------

    def test_publish_rejects_long_description(self):
        user = self.signup()
        response = self.client.post(
            "/create-blog",
            json={
                "title": "Too long",
                "des": "x" * 250,
                "banner": "https://example.test/b.jpeg",
                "content": CONTENT,
                "tags": ["a"],
                "draft": False,
            },
            headers=self.auth(user),
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            response.json()["error"],
            "You must provide blog description under 200 characters",
        )
        self.assertEqual(self.count(BlogRow), 0)

    def test_draft_description_is_capped(self):
        user = self.signup()
        response = self.client.post(
            "/create-blog",
            json={"title": "Long draft", "des": "x" * 201, "draft": True},
            headers=self.auth(user),
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            response.json()["error"],
            "You must provide blog description under 200 characters",
        )
        self.assertEqual(self.count(BlogRow), 0)

        ok = self.client.post(
            "/create-blog",
            json={"title": "Short draft", "des": "x" * 200, "draft": True},
            headers=self.auth(user),
        )
        self.assertEqual(ok.status_code, 200)

    def test_publish_validation(self):
        user = self.signup()
        base = {
            "title": "Title",
            "des": "desc",
            "banner": "https://example.test/b.jpeg",
            "content": CONTENT,
            "tags": ["a"],
        }
        cases = [
            ({"title": ""}, "You must provide a title"),
            ({"banner": ""}, "You must provide blog banner to publish it"),
            ({"content": {"blocks": []}}, "There must be some blog content to publish it"),
            ({"tags": []}, "Provide tags in order to publish the blog, Maximum 10"),
            ({"tags": [str(i) for i in range(11)]},
             "Provide tags in order to publish the blog, Maximum 10"),
        ]
        for override, message in cases:
            response = self.client.post(
                "/create-blog", json={**base, **override}, headers=self.auth(user)
            )
            self.assertEqual(response.status_code, 403)
            self.assertEqual(response.json()["error"], message)
        self.assertEqual(self.count(BlogRow), 0)

    def test_draft_then_publish_counts_posts_once(self):
        user = self.signup()
        slug = self.publish(user, title="Work in progress", des="", banner="", tags=[], draft=True)
        profile = self.client.post("/get-profile", json={"username": "jane"}).json()
        self.assertEqual(profile["account_info"]["total_posts"], 0)

        drafts = self.client.post(
            "/user-written-blogs", json={"draft": True}, headers=self.auth(user)
        )
        self.assertEqual([b["blog_id"] for b in drafts.json()["blogs"]], [slug])

        self.publish(user, title="Finished", id=slug)
        profile = self.client.post("/get-profile", json={"username": "jane"}).json()
        self.assertEqual(profile["account_info"]["total_posts"], 1)
        blog = self.client.post("/get-blog", json={"blog_id": slug}).json()["blog"]
        self.assertEqual(blog["title"], "Finished")
        self.assertFalse(blog["draft"])

    def test_get_blog_counts_reads_except_in_edit_mode(self):
        user = self.signup()
        slug = self.publish(user)
        first = self.client.post("/get-blog", json={"blog_id": slug})
        self.assertEqual(first.status_code, 200)
        blog = first.json()["blog"]
        self.assertEqual(blog["activity"]["total_reads"], 1)
        self.assertEqual(blog["author"]["username"], "jane")
        self.assertEqual(blog["tags"], ["python", "web"])
        self.assertEqual(blog["content"], CONTENT)

        edit = self.client.post("/get-blog", json={"blog_id": slug, "mode": "edit"})
        self.assertEqual(edit.json()["blog"]["activity"]["total_reads"], 1)

        profile = self.client.post("/get-profile", json={"username": "jane"}).json()
        self.assertEqual(profile["account_info"]["total_reads"], 1)

    def test_draft_is_hidden_unless_requested(self):
        user = self.signup()
        slug = self.publish(user, title="Secret", draft=True)
        hidden = self.client.post("/get-blog", json={"blog_id": slug})
        self.assertEqual(hidden.status_code, 403)
        self.assertEqual(hidden.json()["error"], "you can not access draft blogs")
        shown = self.client.post("/get-blog", json={"blog_id": slug, "draft": True, "mode": "edit"})
        self.assertEqual(shown.status_code, 200)

        latest = self.client.post("/latest-blogs", json={"page": 1}).json()
        self.assertEqual(latest["blogs"], [])

    def test_unknown_blog_is_not_found(self):
        response = self.client.post("/get-blog", json={"blog_id": "missing"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Blog not found"})

    def test_only_author_can_edit_or_delete(self):
        jane = self.signup()
        bob = self.signup(email="bob@example.com", fullname="Bob Reader")
        slug = self.publish(jane)
        edit = self.client.post(
            "/create-blog",
            json={"title": "Hijack", "draft": True, "id": slug},
            headers=self.auth(bob),
        )
        self.assertEqual(edit.status_code, 403)
        delete = self.client.post("/delete-blog", json={"blog_id": slug}, headers=self.auth(bob))
        self.assertEqual(delete.status_code, 403)
        self.assertEqual(self.count(BlogRow), 1)

    def test_latest_blogs_pagination_and_count(self):
        user = self.signup()
        for i in range(7):
            self.publish(user, title=f"Post {i}")
        page_one = self.client.post("/latest-blogs", json={"page": 1}).json()["blogs"]
        page_two = self.client.post("/latest-blogs", json={"page": 2}).json()["blogs"]
        self.assertEqual(len(page_one), 5)
        self.assertEqual(len(page_two), 2)
        self.assertEqual(
            len({b["blog_id"] for b in page_one} | {b["blog_id"] for b in page_two}), 7
        )
        count = self.client.post("/all-latest-blogs-count").json()
        self.assertEqual(count, {"totalDocs": 7})

    def test_search_by_tag_query_and_author(self):
        jane = self.signup()
        bob = self.signup(email="bob@example.com", fullname="Bob Writer")
        py_one = self.publish(jane, title="Learning Python", tags=["python"])
        py_two = self.publish(bob, title="Python tricks", tags=["Python", "tips"])
        self.publish(bob, title="Gardening", tags=["outdoors"])

        by_tag = self.client.post("/search-blogs", json={"tag": "python", "limit": 10}).json()
        self.assertEqual({b["blog_id"] for b in by_tag["blogs"]}, {py_one, py_two})

        similar = self.client.post(
            "/search-blogs", json={"tag": "python", "limit": 10, "eliminate_blog": py_one}
        ).json()
        self.assertEqual([b["blog_id"] for b in similar["blogs"]], [py_two])

        by_query = self.client.post("/search-blogs", json={"query": "PYTHON", "limit": 10}).json()
        self.assertEqual(len(by_query["blogs"]), 2)

        with self.db.Session() as session:
            bob_user = session.execute(
                select(UserRow).where(UserRow.username == "bob")
            ).scalar_one()
        by_author = self.client.post("/search-blogs", json={"author": bob_user.id}).json()
        self.assertEqual(len(by_author["blogs"]), 2)

        count = self.client.post("/search-blogs-count", json={"tag": "python"}).json()
        self.assertEqual(count, {"totalDocs": 2})

    def test_search_default_page_size(self):
        user = self.signup()
        for i in range(3):
            self.publish(user, title=f"Rust {i}")
        response = self.client.post("/search-blogs", json={"query": "rust"}).json()
        self.assertEqual(len(response["blogs"]), 2)

    def test_trending_orders_by_reads(self):
        user = self.signup()
        quiet = self.publish(user, title="Quiet")
        popular = self.publish(user, title="Popular")
        for _ in range(3):
            self.client.post("/get-blog", json={"blog_id": popular})
        self.client.post("/get-blog", json={"blog_id": quiet})
        trending = self.client.get("/trending-blogs").json()["blogs"]
        self.assertEqual([b["blog_id"] for b in trending], [popular, quiet])

    def test_user_written_blogs_and_count(self):
        user = self.signup()
        self.publish(user, title="Alpha")
        self.publish(user, title="Beta")
        self.publish(user, title="Gamma", draft=True)
        published = self.client.post(
            "/user-written-blogs", json={"page": 1, "draft": False}, headers=self.auth(user)
        ).json()["blogs"]
        self.assertEqual({b["title"] for b in published}, {"Alpha", "Beta"})
        filtered = self.client.post(
            "/user-written-blogs-count",
            json={"draft": False, "query": "alp"},
            headers=self.auth(user),
        ).json()
        self.assertEqual(filtered, {"totalDocs": 1})

    def test_like_then_unlike_restores_state(self):
        jane = self.signup()
        bob = self.signup(email="bob@example.com", fullname="Bob Reader")
        blog_pk = self.blog_pk(self.publish(jane))

        liked = self.client.post(
            "/like-blog", json={"id": blog_pk, "is_liked_by_user": False}, headers=self.auth(bob)
        )
        self.assertEqual(liked.json(), {"liked_by_user": True})
        self.assertEqual(self.db.get_blog(blog_pk).total_likes, 1)
        self.assertEqual(self.count(NotificationRow, NotificationRow.type == "like"), 1)
        status = self.client.post("/isliked-by-user", json={"id": blog_pk}, headers=self.auth(bob))
        self.assertEqual(status.json(), {"result": True})

        unliked = self.client.post(
            "/like-blog", json={"id": blog_pk, "is_liked_by_user": True}, headers=self.auth(bob)
        )
        self.assertEqual(unliked.json(), {"liked_by_user": False})
        self.assertEqual(self.db.get_blog(blog_pk).total_likes, 0)
        self.assertEqual(self.count(NotificationRow, NotificationRow.type == "like"), 0)

    def test_stale_like_flag_does_not_double_count(self):
        jane = self.signup()
        bob = self.signup(email="bob@example.com", fullname="Bob Reader")
        blog_pk = self.blog_pk(self.publish(jane))
        for _ in range(2):
            self.client.post(
                "/like-blog", json={"id": blog_pk, "is_liked_by_user": False}, headers=self.auth(bob)
            )
        self.assertEqual(self.db.get_blog(blog_pk).total_likes, 1)
        self.assertEqual(self.count(NotificationRow, NotificationRow.type == "like"), 1)

    def test_delete_blog_cascades(self):
        jane = self.signup()
        bob = self.signup(email="bob@example.com", fullname="Bob Reader")
        slug = self.publish(jane)
        blog_pk = self.blog_pk(slug)
        self.client.post("/like-blog", json={"id": blog_pk}, headers=self.auth(bob))
        comment = self.client.post(
            "/add-comment", json={"id": blog_pk, "comment": "Nice"}, headers=self.auth(bob)
        ).json()
        self.client.post(
            "/add-comment",
            json={"id": blog_pk, "comment": "Thanks", "replying_to": comment["id"]},
            headers=self.auth(jane),
        )

        response = self.client.post("/delete-blog", json={"blog_id": slug}, headers=self.auth(jane))
        self.assertEqual(response.json(), {"status": "done"})
        self.assertEqual(self.count(BlogRow), 0)
        self.assertEqual(self.count(NotificationRow), 0)
        self.assertIsNone(self.db.get_comment(comment["id"]))
        profile = self.client.post("/get-profile", json={"username": "jane"}).json()
        self.assertEqual(profile["account_info"]["total_posts"], 0)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def test_update_profile(self):
        user = self.signup()
        self.signup(email="taken@example.com", fullname="Taken User")

        bad_link = self.client.post(
            "/update-profile",
            json={"username": "jane", "bio": "", "social_links": {"github": "https://gitlab.com/jane"}},
            headers=self.auth(user),
        )
        self.assertEqual(bad_link.status_code, 403)
        self.assertEqual(bad_link.json()["error"], "github link is invalid. You must enter a full link")

        no_scheme = self.client.post(
            "/update-profile",
            json={"username": "jane", "social_links": {"website": "jane.dev"}},
            headers=self.auth(user),
        )
        self.assertEqual(
            no_scheme.json()["error"],
            "You must provide full social links with http(s) included",
        )

        long_bio = self.client.post(
            "/update-profile",
            json={"username": "jane", "bio": "b" * 151},
            headers=self.auth(user),
        )
        self.assertEqual(long_bio.json()["error"], "Bio should not be more than 150 characters")

        taken = self.client.post(
            "/update-profile", json={"username": "taken"}, headers=self.auth(user)
        )
        self.assertEqual(taken.status_code, 409)
        self.assertEqual(taken.json()["error"], "username is already taken")

        ok = self.client.post(
            "/update-profile",
            json={
                "username": "janew",
                "bio": "I write things",
                "social_links": {"github": "https://github.com/janew", "website": "https://jane.dev"},
            },
            headers=self.auth(user),
        )
        self.assertEqual(ok.json(), {"username": "janew"})
        profile = self.client.post("/get-profile", json={"username": "janew"}).json()
        self.assertEqual(profile["bio"], "I write things")
        self.assertEqual(profile["social_links"]["github"], "https://github.com/janew")
        self.assertEqual(profile["social_links"]["youtube"], "")
        self.assertNotIn("password", profile)

    def test_update_profile_img_and_search_users(self):
        user = self.signup()
        self.signup(email="janet@example.com", fullname="Janet Other")
        updated = self.client.post(
            "/update-profile-img",
            json={"url": "https://example.test/me.jpeg"},
            headers=self.auth(user),
        )
        self.assertEqual(updated.json(), {"profile_img": "https://example.test/me.jpeg"})

        users = self.client.post("/search-users", json={"query": "jan"}).json()["users"]
        self.assertEqual({u["username"] for u in users}, {"jane", "janet"})
        jane = next(u for u in users if u["username"] == "jane")
        self.assertEqual(jane["profile_img"], "https://example.test/me.jpeg")

    def test_get_profile_unknown_user(self):
        response = self.client.post("/get-profile", json={"username": "ghost"})
        self.assertEqual(response.status_code, 404)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def test_notifications_feed(self):
        jane = self.signup()
        bob = self.signup(email="bob@example.com", fullname="Bob Reader")
        blog_pk = self.blog_pk(self.publish(jane))

        self.client.post("/like-blog", json={"id": blog_pk}, headers=self.auth(bob))
        self.client.post(
            "/add-comment", json={"id": blog_pk, "comment": "Great read"}, headers=self.auth(bob)
        )
        # Jane commenting on her own blog does not notify herself.
        self.client.post(
            "/add-comment", json={"id": blog_pk, "comment": "Thanks all"}, headers=self.auth(jane)
        )

        fresh = self.client.get("/new-notification", headers=self.auth(jane)).json()
        self.assertEqual(fresh, {"new_notification_available": True})

        count = self.client.post(
            "/all-notifications-count", json={"filter": "all"}, headers=self.auth(jane)
        ).json()
        self.assertEqual(count, {"totalDocs": 2})
        likes = self.client.post(
            "/all-notifications-count", json={"filter": "like"}, headers=self.auth(jane)
        ).json()
        self.assertEqual(likes, {"totalDocs": 1})

        feed = self.client.post(
            "/notifications", json={"page": 1, "filter": "comment"}, headers=self.auth(jane)
        ).json()["notifications"]
        self.assertEqual(len(feed), 1)
        self.assertEqual(feed[0]["type"], "comment")
        self.assertEqual(feed[0]["comment"]["comment"], "Great read")
        self.assertEqual(feed[0]["user"]["username"], "bob")
        self.assertFalse(feed[0]["seen"])

        self.client.post("/notifications", json={"page": 1}, headers=self.auth(jane))
        after = self.client.get("/new-notification", headers=self.auth(jane)).json()
        self.assertEqual(after, {"new_notification_available": False})

    def test_notifications_rejects_unknown_filter(self):
        user = self.signup()
        response = self.client.post(
            "/notifications", json={"filter": "follow"}, headers=self.auth(user)
        )
        self.assertEqual(response.status_code, 403)
        self.assertIn("error", response.json())


class AppSettingsTests(unittest.TestCase):
    def test_default_secret_logs_warning(self):
        settings = Settings(
            secret_access_key=DEFAULT_SECRET_ACCESS_KEY, use_in_memory_backends=False
        )
        with self.assertLogs("thoughttrail.app", level="WARNING") as logs:
            create_app(settings)
        self.assertIn("SECRET_ACCESS_KEY", logs.output[0])

    def test_configured_secret_is_quiet(self):
        settings = Settings(secret_access_key="a-real-secret", use_in_memory_backends=False)
        with self.assertNoLogs("thoughttrail.app", level="WARNING"):
            create_app(settings)

    def test_in_memory_mode_is_quiet(self):
        settings = Settings(
            secret_access_key=DEFAULT_SECRET_ACCESS_KEY, use_in_memory_backends=True
        )
        with self.assertNoLogs("thoughttrail.app", level="WARNING"):
            create_app(settings)


if __name__ == "__main__":
    unittest.main()

from payment import ReminderGroup, build_reminder_queue, reminder_rank, reminder_status


class TestReminderRank:
    def test_group_precedence(self, make_item, today):
        ranks = [reminder_rank(make_item(o), today)[0] for o in (-40, -10, 0, 2, None, 10)]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == 6

    def test_thirty_days_past_is_still_grace(self, make_item, today):
        assert reminder_rank(make_item(-30), today)[0] == ReminderGroup.GRACE
        assert reminder_rank(make_item(-31), today)[0] == ReminderGroup.OVERDUE

    def test_three_days_is_imminent(self, make_item, today):
        assert reminder_rank(make_item(3), today)[0] == ReminderGroup.IMMINENT
        assert reminder_rank(make_item(4), today)[0] == ReminderGroup.FUTURE


class TestBuildReminderQueue:
    def test_orders_by_urgency(self, make_item, today):
        offsets = [10, None, 2, 0, -10, -40]
        items = [make_item(o, name=str(o)) for o in offsets]
        queue = build_reminder_queue(items, today)
        assert [r.days_remaining for r in queue] == [-40, -10, 0, 2, None, 10]
        assert [r.group for r in queue] == list(ReminderGroup)

    def test_excludes_paid_and_owned(self, make_item, today):
        items = [
            make_item(-40, payment="full_paid", name="paid"),
            make_item(-40, ownership="owned", name="home"),
            make_item(5, name="pending"),
        ]
        queue = build_reminder_queue(items, today)
        assert [r.item.name for r in queue] == ["pending"]

    def test_undated_items_keep_input_order(self, make_item, today):
        items = [make_item(None, name=n) for n in ("a", "b", "c")]
        assert [r.item.name for r in build_reminder_queue(items, today)] == ["a", "b", "c"]

    def test_more_overdue_first_within_group(self, make_item, today):
        items = [make_item(-35, name="late"), make_item(-90, name="later")]
        assert [r.item.name for r in build_reminder_queue(items, today)] == ["later", "late"]

    def test_empty(self, today):
        assert build_reminder_queue([], today) == []


class TestReminderStatus:
    def _status(self, make_item, today, offset):
        return reminder_status(build_reminder_queue([make_item(offset)], today)[0])

    def test_no_date(self, make_item, today):
        assert self._status(make_item, today, None) == ("No final payment date set", "no-date")

    def test_overdue(self, make_item, today):
        assert self._status(make_item, today, -45) == ("Overdue by 15 days", "overdue")

    def test_today(self, make_item, today):
        assert self._status(make_item, today, 0)[1] == "today"

    def test_grace(self, make_item, today):
        assert self._status(make_item, today, -30) == ("0 days left in grace period", "urgent")

    def test_imminent_and_normal(self, make_item, today):
        assert self._status(make_item, today, 3) == ("3 days left", "urgent")
        assert self._status(make_item, today, 9) == ("9 days left", "normal")

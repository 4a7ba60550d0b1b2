"""Tests for the Hi-Lo counting drill session."""

import pytest

from trainer.counting import HiLoSystem
from trainer.drills import CountingSession, CountingState, EventType

HILO = HiLoSystem()


def correct_guess(session):
    return HILO.label(session.current_card)


def wrong_guess(session):
    return next(label for label in ("+1", "0", "-1") if label != correct_guess(session))


class TestDealing:
    """Tests for dealing cards."""

    def test_initial_state(self, counting_session):
        """Test a new session shows no card and zero counts."""
        assert counting_session.state == CountingState.NO_CARD
        assert counting_session.current_card is None
        assert counting_session.running_count == 0
        assert counting_session.true_count == 0
        assert counting_session.shoe.remaining_cards == 312
        assert counting_session.error_tally == {"+1": 0, "0": 0, "-1": 0}

    def test_deal_next_shows_card(self, counting_session):
        """Test dealing draws the next card from the shoe."""
        expected = list(counting_session.shoe)[0]
        card = counting_session.deal_next()
        assert card == expected
        assert counting_session.current_card == expected
        assert counting_session.state == CountingState.CARD_SHOWN
        assert counting_session.shoe.remaining_cards == 311

    def test_deal_does_not_count(self, counting_session):
        """Test dealing alone leaves the count untouched."""
        counting_session.deal_next()
        counting_session.deal_next()
        assert counting_session.running_count == 0

    def test_submit_without_card_is_noop(self, counting_session):
        """Test guessing with no card on show changes nothing."""
        assert counting_session.submit("+1") is None
        assert counting_session.stats.attempts == 0
        assert len(counting_session.history) == 0

    def test_submit_invalid_guess(self, counting_session):
        """Test malformed guesses raise ValueError."""
        counting_session.deal_next()
        with pytest.raises(ValueError):
            counting_session.submit("+2")


class TestSubmit:
    """Tests for judging guesses."""

    def test_correct_guess(self, counting_session):
        """Test a correct guess scores and updates the running count."""
        card = counting_session.deal_next()
        result = counting_session.submit(correct_guess(counting_session))
        assert result.is_correct
        assert result.card == card
        assert counting_session.stats.attempts == 1
        assert counting_session.stats.corrects == 1
        assert counting_session.stats.streak == 1
        assert counting_session.running_count == HILO.tag(card)

    def test_wrong_guess_tallies_guessed_label(self, counting_session):
        """Test misses are tallied under the label that was guessed."""
        counting_session.deal_next()
        guess = wrong_guess(counting_session)
        result = counting_session.submit(guess)
        assert not result.is_correct
        assert counting_session.stats.streak == 0
        assert counting_session.error_tally[guess] == 1
        assert sum(counting_session.error_tally.values()) == 1

    def test_count_updates_even_when_wrong(self, counting_session):
        """Test the running count follows the cards, not the guesses."""
        card = counting_session.deal_next()
        counting_session.submit(wrong_guess(counting_session))
        assert counting_session.running_count == HILO.tag(card)

    def test_submit_auto_deals_next(self, counting_session):
        """Test each guess immediately shows the next card."""
        counting_session.deal_next()
        upcoming = list(counting_session.shoe)[0]
        counting_session.submit(correct_guess(counting_session))
        assert counting_session.current_card == upcoming
        assert counting_session.state == CountingState.CARD_SHOWN

    def test_running_and_true_count_over_many_cards(self, counting_session):
        """Test counts match the Hi-Lo sum and remaining decks."""
        counting_session.deal_next()
        seen = []
        for _ in range(120):
            seen.append(counting_session.current_card)
            counting_session.submit(correct_guess(counting_session))

        expected_rc = sum(HILO.tag(card) for card in seen)
        assert counting_session.running_count == expected_rc

        checker = HiLoSystem()
        for card in seen:
            checker.count_card(card)
        # the shown card has been drawn, so one fewer remains than when judged
        remaining_at_judgement = (counting_session.shoe.remaining_cards + 1) / 52
        assert counting_session.true_count == checker.true_count(
            max(0.25, remaining_at_judgement)
        )

    def test_history(self, counting_session):
        """Test history records the card, guess and counts, latest first."""
        first = counting_session.deal_next()
        counting_session.submit(correct_guess(counting_session))
        second = counting_session.current_card
        guess = wrong_guess(counting_session)
        counting_session.submit(guess)

        latest, earlier = counting_session.history[0], counting_session.history[1]
        assert latest.card == second
        assert latest.guess == guess
        assert latest.correct == HILO.label(second)
        assert latest.running_count == counting_session.running_count
        assert latest.true_count == counting_session.true_count
        assert earlier.card == first
        assert earlier.is_correct

    def test_history_capped(self, rng):
        """Test history keeps at most the configured number of entries."""
        session = CountingSession(num_decks=1, rng=rng, history_limit=5)
        session.deal_next()
        for _ in range(10):
            session.submit("0")
        assert len(session.history) == 5

    def test_last_result(self, counting_session):
        """Test the last result is kept for feedback."""
        card = counting_session.deal_next()
        counting_session.submit(correct_guess(counting_session))
        assert counting_session.last_result.card == card

    def test_guess_event(self, counting_session):
        """Test judged guesses are published with the new counts."""
        events = []
        counting_session.subscribe(events.append, EventType.GUESS_JUDGED)
        counting_session.deal_next()
        counting_session.submit(correct_guess(counting_session))
        assert events[0].data["is_correct"]
        assert events[0].data["running_count"] == counting_session.running_count


class TestExhaustion:
    """Tests for running through the shoe."""

    def test_reshuffle_after_last_card(self, single_deck_session):
        """Test judging the last card replaces the shoe and zeroes counts."""
        session = single_deck_session
        old_shoe = session.shoe
        session.deal_next()
        for _ in range(51):
            session.submit(correct_guess(session))
        assert old_shoe.remaining_cards == 0
        assert session.current_card is not None

        events = []
        session.subscribe(events.append, EventType.SHOE_RESHUFFLED)
        session.submit(correct_guess(session))

        assert session.shoe is not old_shoe
        assert session.shoe.remaining_cards == 52
        assert session.current_card is None
        assert session.state == CountingState.NO_CARD
        assert session.running_count == 0
        assert session.true_count == 0
        assert session.stats.attempts == 52
        assert len(session.history) == 52
        assert len(events) == 1

    def test_full_deck_counts_back_to_zero(self, single_deck_session):
        """Test the running count before the final card mirrors its tag."""
        session = single_deck_session
        session.deal_next()
        for _ in range(51):
            session.submit("0")
        last = session.current_card
        assert session.running_count == -HILO.tag(last)

    def test_deal_after_exhaustion(self, single_deck_session):
        """Test dealing again continues from the fresh shoe."""
        session = single_deck_session
        session.deal_next()
        for _ in range(52):
            session.submit("0")
        assert session.deal_next() is not None
        assert session.shoe.remaining_cards == 51

    def test_deal_next_on_exhausted_shoe(self, single_deck_session):
        """Test dealing past the end reshuffles without showing a card."""
        session = single_deck_session
        for _ in range(52):
            session.deal_next()
        assert session.current_card is not None
        assert session.deal_next() is None
        assert session.current_card is None
        assert session.shoe.remaining_cards == 52


class TestDeckCountAndReset:
    """Tests for changing deck count and resetting."""

    def _play(self, session, n=10):
        session.deal_next()
        for _ in range(n):
            session.submit("+1")

    def test_set_deck_count_resets(self, counting_session):
        """Test changing deck count starts a fresh session."""
        self._play(counting_session)
        counting_session.set_deck_count(2)
        assert counting_session.deck_count == 2
        assert counting_session.shoe.remaining_cards == 104
        assert counting_session.running_count == 0
        assert counting_session.true_count == 0
        assert counting_session.stats.attempts == 0
        assert len(counting_session.history) == 0
        assert counting_session.error_tally == {"+1": 0, "0": 0, "-1": 0}
        assert counting_session.current_card is None
        assert counting_session.state == CountingState.NO_CARD

    def test_set_same_deck_count_is_noop(self, counting_session):
        """Test setting the current deck count changes nothing."""
        self._play(counting_session)
        shoe = counting_session.shoe
        running = counting_session.running_count
        counting_session.set_deck_count(6)
        assert counting_session.shoe is shoe
        assert counting_session.running_count == running
        assert counting_session.stats.attempts == 10
        assert len(counting_session.history) == 10

    @pytest.mark.parametrize("num_decks", [0, 3, 9])
    def test_invalid_deck_count(self, counting_session, num_decks):
        """Test deck counts outside the offered choices raise ValueError."""
        with pytest.raises(ValueError):
            counting_session.set_deck_count(num_decks)

    def test_reset_session(self, counting_session):
        """Test reset keeps the deck count and clears everything else."""
        self._play(counting_session)
        events = []
        counting_session.subscribe(events.append, EventType.SESSION_RESET)
        counting_session.reset_session()
        assert counting_session.deck_count == 6
        assert counting_session.shoe.remaining_cards == 312
        assert counting_session.stats.attempts == 0
        assert counting_session.last_result is None
        assert counting_session.current_card is None
        assert len(events) == 1

    def test_reset_is_complete_when_observed(self, counting_session):
        """Test subscribers see a fully reset session."""
        self._play(counting_session)
        observed = []
        counting_session.subscribe(
            lambda event: observed.append(
                (
                    counting_session.running_count,
                    counting_session.stats.attempts,
                    len(counting_session.history),
                    counting_session.current_card,
                )
            ),
            EventType.SESSION_RESET,
        )
        counting_session.reset_session()
        assert observed == [(0, 0, 0, None)]

    def test_zero_history_limit_rejected(self, rng):
        """Test an explicit zero history limit is not replaced by the default."""
        with pytest.raises(ValueError):
            CountingSession(num_decks=1, rng=rng, history_limit=0)
